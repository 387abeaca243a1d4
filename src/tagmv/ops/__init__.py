"""File operations for tagmv.

Submodules:
    plan      -- compute_destination / compute_unsorted_destination. Pure:
                 builds "Artist - Album/NN - Title.ext" or "_Unsorted/<name>"
                 PlannedMoves without touching the disk.
    conflicts -- resolve_conflicts: one ordered pass over a batch, appending
                 " (n)" before the extension until a destination is neither
                 on disk nor claimed earlier in the batch. Bounded; entries
                 that run out of names are flagged conflict_exhausted.
    move      -- execute_move: mkdir -p, existence re-check, atomic rename,
                 and copy/fsync/verify/delete fallback for cross-device
                 moves only. Failures raise MoveError subclasses; the source
                 is never removed before a verified copy exists.
"""
