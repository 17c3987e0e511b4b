from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

from zipscope.domain.constants import APP_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the ZipScope CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="zipscope",
        description="Browse the folder tree of a zip archive without extracting it.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Source ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Archive path or http(s) URL.",
    )

    # --- Presentation ---
    p.add_argument("--json", dest="json_output", action="store_true",
                   help="Print the tree and indices as JSON.")
    p.add_argument("--no-sizes", action="store_true",
                   help="Omit size columns from the tree listing.")
    p.add_argument("--precision", dest="size_precision", type=int, default=None,
                   help="Significant digits in size strings (default 3).")
    p.add_argument("--date-format", dest="date_format", default=None,
                   help="strftime pattern for modification times.")

    # --- Ordering ---
    p.add_argument("--case-sensitive", action="store_true",
                   help="Compare names case-sensitively when sorting.")
    p.add_argument("--locale-sort", action="store_true",
                   help="Collate names with the active locale.")

    # --- Entry Operations ---
    p.add_argument("--cat", dest="cat_entry", default=None, metavar="ENTRY",
                   help="Write one entry's content to stdout.")
    p.add_argument("--extract", dest="extract_entry", default=None, metavar="ENTRY",
                   help="Extract one entry under extract_dir (default: current directory).")
    p.add_argument("--extract-all", dest="extract_all", nargs="?", const="", default=None,
                   metavar="DIR", help="Extract the whole archive (default: next to it).")
    p.add_argument("--add", dest="add_file", default=None, metavar="FILE",
                   help="Append a local file to the archive and save it.")

    # --- Configuration and Diagnostics ---
    p.add_argument("--use-defaults", action="store_true",
                   help="Ignore the stored configuration.")
    p.add_argument("--dump-config", action="store_true",
                   help="Print the effective configuration and exit.")
    p.add_argument("--save-config", action="store_true",
                   help="Persist the effective configuration as the last session.")
    p.add_argument("--log-file", dest="log_file", default=None,
                   help="Write logs to this file (default: the user data log).")
    p.add_argument("--debug", action="store_true",
                   help="Elevate logging verbosity to DEBUG.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Returns:
        Dict[str, Any]: Overrides; None values mean "keep the base value".
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "size_precision": args.size_precision,
        "date_format": args.date_format,
    }

    if args.no_sizes:
        overrides["show_sizes"] = False
    if args.case_sensitive:
        overrides["sort_case_sensitive"] = True
    if args.locale_sort:
        overrides["sort_locale_aware"] = True
    if args.extract_all:
        overrides["extract_dir"] = args.extract_all

    return overrides
