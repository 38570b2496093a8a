# Main.py
""""" Manual runner for the expression evaluator.

   Responsibilities:
   - Verify required files exist when run from a source checkout
   - Load configuration and logging
   - Evaluate one expression (argument or prompt) and print the result

"""""
import sys
import argparse
from pathlib import Path

from ExprEval import error as E
from ExprEval import ExprEngine as ExprEngine
from ExprEval import logging_utils as logging_utils


PROJECT_ROOT = Path(__file__).resolve().parent


def is_source_checkout():
    """True when running from the repository rather than an installed copy."""
    return (PROJECT_ROOT / "pyproject.toml").exists()


def check_files_exist():

    """
      Fail fast in a source checkout if required files are missing / moved / renamed.

      Returns the list of missing file names (empty when everything is there).
      - Installed copies have no config.json next to main.py -> check is skipped,
        config_manager falls back to its defaults there.
    """

    if not is_source_checkout():
        return []

    package_dir = PROJECT_ROOT / "ExprEval"

    REQUIRED = [
        package_dir / "ExprEngine.py",
        package_dir / "Grammar.py",
        package_dir / "error.py",
        package_dir / "config_manager.py",
        PROJECT_ROOT / "config.json",
    ]

    return [file_path.name for file_path in REQUIRED if not file_path.exists()]


def build_parser():
    parser = argparse.ArgumentParser(description="Evaluate an arithmetic expression.")
    parser.add_argument("expression", nargs="?", help="expression, e.g. \"(5 + 3) * 2\"")
    parser.add_argument("--scale", type=int, default=None,
                        help="fractional digits of the result (default: decimal_places from config.json)")
    return parser


def main(argv=None):

    """
    Evaluate one expression and print the rendered result.
    - Keep this thin: no business logic here.
    """

    args = build_parser().parse_args(argv)
    logger = logging_utils.get_logger("expreval.main")

    problem = args.expression
    if problem is None:
        print("Enter the problem: ")
        problem = input()

    try:
        result = ExprEngine.calculate(problem, scale=args.scale)
    except E.MathError as e:
        logger.debug("Expression [%s] rejected with code %s", problem, e.code)
        print(E.describe(e), file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    missing_files = check_files_exist()
    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)
    sys.exit(main())
