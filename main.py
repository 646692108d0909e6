import argparse
import logging
import sys

from pydantic import ValidationError

from calculator_batch import evaluate_csv, summarize
from calculator_config import LOG_LEVELS, CalculatorConfig
from string_calculator import StringCalculator, StringCalculatorError


def unescape(expression):
    # Lets "//;\n1;2" be typed on a shell command line
    return expression.replace('\\n', '\n')


def build_parser():
    parser = argparse.ArgumentParser(description="Sum numbers separated by ',' ':' or a custom '//x\\n' delimiter")
    parser.add_argument("expressions", nargs="*", help="Expressions to sum, e.g. '1,2:3' or '//;\\n1;2'")
    parser.add_argument("--csv", help="CSV file with one expression per row")
    parser.add_argument("--column", help="CSV column holding the expressions")
    parser.add_argument("--output", help="Write the evaluated CSV here")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Logging level")
    return parser


def run_expressions(expressions):
    calc = StringCalculator()
    failed = 0
    for expression in expressions:
        try:
            result = calc.add(unescape(expression))
            print(f"{expression} -> {result}")
        except StringCalculatorError as e:
            failed += 1
            print(f"{expression} -> error: {e}")
    return 1 if failed else 0


def run_csv(path, column, output):
    evaluated = evaluate_csv(path, column=column, output=output)
    print(evaluated)
    summary = summarize(evaluated)
    print(f"\nRows: {summary['rows']}, OK: {summary['ok']}, Failed: {summary['failed']}, Total: {summary['total']}")
    return 1 if summary['failed'] else 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = CalculatorConfig()
    except ValidationError as e:
        parser.error(f"invalid STRING_CALCULATOR_* environment: {e}")
    column = args.column or config.column
    log_level = args.log_level or config.log_level
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.csv:
        return run_csv(args.csv, column, args.output)
    if not args.expressions:
        parser.error("give at least one expression or --csv FILE")
    return run_expressions(args.expressions)


if __name__ == "__main__":
    sys.exit(main())
