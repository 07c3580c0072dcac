"""
Lab Grader: static autograder for the 6-2 Node/Express lab

Usage:
  main.py [--root=PATH] [--config=PATH] [--output-dir=PATH] [--verbose]
  main.py (-h | --help)

Options:
  --root=PATH        Working tree to grade [default: .].
  --config=PATH      Path to YAML configuration file (default: <root>/grader_config.yml if present).
  --output-dir=PATH  Directory for grade.json and grade.md (default: <root>/dist/grading).
  --verbose          Print located files and detected signals.
  -h --help          Show this screen.
"""

import sys
from pathlib import Path

from docopt import DocoptExit, docopt

from lab_grader.config import DEFAULT_CONFIG_FILENAME
from lab_grader.config_loader import GraderConfig, load_config
from lab_grader.pipeline import grade_repository, publish_report


def resolve_config(arguments: dict) -> GraderConfig:
    """
    Build the configuration from the optional YAML file and CLI flags.

    Config errors are printed and the defaults are used instead; CLI flags
    always win over file values.

    Args:
        arguments: Parsed docopt arguments.

    Returns:
        GraderConfig for this run.
    """
    root = Path(arguments["--root"]).resolve()
    config = GraderConfig(root=root)

    config_path = Path(arguments["--config"]) if arguments["--config"] else root / DEFAULT_CONFIG_FILENAME
    if arguments["--config"] or config_path.exists():
        try:
            config = load_config(config_path)
            print(f"Loaded configuration from {config_path}")
        except Exception as e:
            print(f"Warning: Error loading config, using defaults: {e}", file=sys.stderr)

    overrides: dict = {}
    if arguments["--root"] != ".":
        overrides["root"] = root
    if arguments["--output-dir"]:
        overrides["output_dir"] = Path(arguments["--output-dir"]).resolve()
    if arguments["--verbose"]:
        overrides["verbose"] = True

    return config.model_copy(update=overrides)


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entrypoint.

    Returns:
        Exit code. Always 0: a low grade is a result, not a tooling failure.
    """
    try:
        arguments = docopt(__doc__, argv=argv)
    except DocoptExit as e:
        print(e, file=sys.stderr)
        return 0
    config = resolve_config(arguments)

    try:
        if config.verbose:
            print(f"Grading {config.root}...")
        report = grade_repository(config)
        publish_report(report, config)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        if config.verbose:
            import traceback
            traceback.print_exc()

    return 0


if __name__ == "__main__":
    sys.exit(main())
