"""Validate JSON files against a schema, or run a query, from the shell.

Usage:
    json-assert validate SCHEMA FILE [FILE ...] [--junit REPORT.xml] [-v]
    json-assert query EXPRESSION FILE [--jsonpath]
"""
import argparse
import json
import logging
import sys
import xml.etree.ElementTree as ET

from json_assert.assertions import JsonAssert
from json_assert.coercion import get_json_object
from json_assert.config import load_settings
from json_assert.exceptions import JsonAssertError
from json_assert.query import JsonPathEvaluator

GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"

EXIT_FAILED = 1
EXIT_ERROR = 2


def print_ok(msg):
    print(f"{GREEN}{msg}{RESET}")


def print_fail(msg):
    print(f"{RED}{msg}{RESET}")


def _read_json(path):
    with open(path, encoding="utf-8") as f:
        return get_json_object(f.read())


def write_junit(path, results):
    testsuite = ET.Element(
        "testsuite",
        name="json_assert",
        tests=str(len(results)),
        failures=str(sum(1 for r in results if r["status"] == "failed")),
        errors=str(sum(1 for r in results if r["status"] == "error")),
    )
    for r in results:
        tc = ET.SubElement(testsuite, "testcase", classname="json_assert.validate", name=r["file"])
        if r["status"] == "failed":
            failure = ET.SubElement(tc, "failure", message="schema validation failed")
            failure.text = r["message"]
        elif r["status"] == "error":
            error = ET.SubElement(tc, "error", message=r["message"])
            error.text = r["message"]
    ET.ElementTree(testsuite).write(path, encoding="utf-8", xml_declaration=True)


def cmd_validate(args, ja):
    results = []
    for path in args.files:
        try:
            content = _read_json(path)
            ja.assert_json_matches_schema(args.schema, content)
        except AssertionError as e:
            print_fail(f"[FAIL] {path}")
            print(e)
            results.append({"file": path, "status": "failed", "message": str(e)})
        except (JsonAssertError, OSError) as e:
            print_fail(f"[ERROR] {path}: {e}")
            results.append({"file": path, "status": "error", "message": str(e)})
        else:
            print_ok(f"[OK] {path}")
            results.append({"file": path, "status": "passed", "message": ""})

    if args.junit:
        write_junit(args.junit, results)
        print(f"JUnit report written to {args.junit}")

    if any(r["status"] == "error" for r in results):
        return EXIT_ERROR
    if any(r["status"] == "failed" for r in results):
        return EXIT_FAILED
    return 0


def cmd_query(args, ja):
    if args.jsonpath:
        ja.evaluator = JsonPathEvaluator()
    try:
        data = _read_json(args.file)
    except (JsonAssertError, OSError) as e:
        print_fail(f"[ERROR] {args.file}: {e}")
        return EXIT_ERROR
    print(json.dumps(ja.search(args.expression, data), indent=2))
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="json-assert", description="JSON Schema and query assertions")
    p.add_argument("-c", "--config", help="YAML config file (default: $JSON_ASSERT_CONFIG or json-assert.yaml)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    v = sub.add_parser("validate", help="Validate JSON files against a schema")
    v.add_argument("schema", help="Schema path or URI")
    v.add_argument("files", nargs="+", help="JSON files to validate")
    v.add_argument("--junit", help="Write a JUnit XML report to this path")
    v.set_defaults(func=cmd_validate)

    q = sub.add_parser("query", help="Print the result of a query expression")
    q.add_argument("expression", help="JMESPath expression (JSONPath with --jsonpath)")
    q.add_argument("file", help="JSON file to query")
    q.add_argument("--jsonpath", action="store_true", help="Evaluate EXPRESSION as JSONPath")
    q.set_defaults(func=cmd_query)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ja = JsonAssert(load_settings(args.config))
    return args.func(args, ja)


if __name__ == "__main__":
    sys.exit(main())
