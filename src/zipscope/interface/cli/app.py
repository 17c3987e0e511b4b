from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merge
(defaults, stored session, CLI overrides), archive opening and the
requested entry operation, then result rendering.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from zipscope.core.analysis.tree_renderer import render_tree, tree_to_dict
from zipscope.core.pipeline.stages.validator import validate_config
from zipscope.core.services.archive_session import ArchiveSession
from zipscope.domain.config import get_default_config, load_config, save_config
from zipscope.domain.errors import (
    ArchiveFormatError,
    ArchiveSourceError,
    EntryIsFolderError,
    EntryNotFoundError,
    UnsafeEntryPathError,
)
from zipscope.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from zipscope.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments, defaults to sys.argv[1:].

    Returns:
        int: 0 success, 1 operation failure, 2 invalid input, 130 interrupted.
    """
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")

    # 1. Argument parsing
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "WARNING"
    log_file = args.log_file or get_default_log_path()
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    # 3. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    cfg, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(cfg)

    if args.dump_config:
        print(json.dumps(cfg, ensure_ascii=False, indent=2))
        return 0

    source = cfg["input_path"]
    if not source:
        print("ERROR: no archive given (use -i/--input).", file=sys.stderr)
        return 2

    # 4. Open archive and dispatch
    try:
        with ArchiveSession.open(source, cfg) as session:
            return _dispatch(session, args, cfg)
    except (ArchiveSourceError, ArchiveFormatError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except (EntryNotFoundError, EntryIsFolderError, UnsafeEntryPathError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130

# -----------------------------------------------------------------------------
# OPERATIONS
# -----------------------------------------------------------------------------

def _dispatch(session: ArchiveSession, args: Any, cfg: Dict[str, Any]) -> int:
    """Run the single operation selected on the command line."""
    if args.cat_entry:
        sys.stdout.buffer.write(session.read_entry(args.cat_entry))
        sys.stdout.flush()
        return 0

    if args.extract_entry:
        target = session.extract_entry(args.extract_entry, cfg["extract_dir"] or os.getcwd())
        print(f"Extracted to: {target}")
        return 0

    if args.extract_all is not None:
        target = session.extract_all(args.extract_all or None)
        print(f"Extracted to: {target}")
        return 0

    if args.add_file:
        session.add_file(args.add_file)
        print(f"Added '{args.add_file}' to {session.archive_name}")

    if args.json_output:
        payload = tree_to_dict(session.tree)
        payload["archive"] = session.archive_name
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        lines = render_tree(session.tree, title=session.archive_name, show_sizes=cfg["show_sizes"])
        print("\n".join(lines))
        _print_human_summary(session)
    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge non-None overrides for known keys into base."""
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_human_summary(session: ArchiveSession) -> None:
    tree = session.tree
    top = tree.top_level
    raw = sum(node.raw_size for node in top)
    compressed = sum(node.compressed_size for node in top)
    print(
        f"\n{tree.file_count} files, {tree.folder_count} folders, "
        f"{raw:,} bytes ({compressed:,} compressed)"
    )


if __name__ == "__main__":
    sys.exit(main())
