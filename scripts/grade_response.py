"""
Grade a matrix question response from the command line.

Reads a question definition (JSON) and a submitted form (JSON object of
"cell{row}_{column}" keys), then prints completeness, the grade and the
response summary. With --json the grade is printed as JSON instead.

Usage:
    python scripts/grade_response.py question.json response.json
    python scripts/grade_response.py question.json --correct
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path so we can import matrix_grader
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from matrix_grader import (  # noqa: E402
    GradingConfig,
    MatrixGradingError,
    correct_response,
    grade_response,
    is_complete,
    summarize_response,
    validation_error,
)
from matrix_grader.core.schemas import ValidationError, check_authoring  # noqa: E402
from matrix_grader.core.utils import (  # noqa: E402
    grade_result_to_dict,
    load_question,
    response_from_form,
)

logger = logging.getLogger("grade_response")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grade a matrix question response")
    parser.add_argument("question", type=Path, help="Question definition JSON")
    parser.add_argument("response", type=Path, nargs="?", help="Submitted form JSON")
    parser.add_argument("--correct", action="store_true",
                        help="Grade the derived correct response instead of a file")
    parser.add_argument("--tolerance", type=float, default=0.0,
                        help="Band around 0/1 still graded wrong/correct")
    parser.add_argument("--ungraded-fraction", type=float, default=1.0,
                        help="Fraction awarded by the 'none' grading method")
    parser.add_argument("--json", action="store_true", help="Print the grade as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.response is None and not args.correct:
        print("Error: give a response file or --correct", file=sys.stderr)
        return 2

    try:
        question = load_question(args.question)
        for issue in check_authoring(question):
            logger.warning(issue)

        if args.correct:
            response = correct_response(question)
        else:
            with open(args.response, "r", encoding="utf-8") as f:
                response = response_from_form(question, json.load(f))

        config = GradingConfig(
            ungraded_fraction=args.ungraded_fraction,
            state_tolerance=args.tolerance,
        )
        result = grade_response(question, response, config=config)
    except (ValidationError, MatrixGradingError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(grade_result_to_dict(result), indent=2))
        return 0

    message = validation_error(question, response)
    print(f"Complete: {'yes' if is_complete(question, response) else 'no'}")
    if message:
        print(f"  {message}")
    print(f"Grade: {result.fraction:.4f} ({result.state.value})")
    print(f"Rows right: {result.rows_right}/{result.rows_graded}")
    print()
    print(summarize_response(question, response))
    return 0


if __name__ == "__main__":
    sys.exit(main())
