"""tagmv -- sort audio files into 'Artist - Album' folders by their tags.

Core modules:
    sanitize -- Filename sanitization (separators, forbidden chars, reserved
                device names). Idempotent; never returns an empty string.
    ffprobe  -- Tag reading via ffprobe subprocess. Returns None for files
                without usable artist/album tags (they go to _Unsorted).
    scanner  -- Audio file discovery (extension filter, hidden files skipped,
                _Unsorted pruned in recursive mode). Sorted output.
    runner   -- Batch orchestration: plan, resolve, preview, execute.
    config   -- Configuration via pydantic-settings (TAGMV_* env vars)
    cli      -- Click CLI entry point. Dry run unless --execute is given.
    errors   -- TagmvError hierarchy and OSError classification

Subpackages:
    ops -- Move planning, conflict resolution, and the safe move primitive
"""
