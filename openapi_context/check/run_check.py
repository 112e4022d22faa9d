#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for checking API description documents."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from ..config import context_config
from . import check_files, CheckResult

DOCUMENT_EXTENSIONS = ('.yaml', '.yml', '.json')


def find_documents(paths: List[str]) -> List[Path]:
    """Find all YAML/JSON documents in given paths."""
    documents = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            documents.append(path)
        elif path.is_dir():
            for ext in DOCUMENT_EXTENSIONS:
                documents.extend(path.rglob(f'*{ext}'))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(documents))


def _position(entry: dict) -> str:
    if 'line' not in entry:
        return ""
    if 'column' in entry:
        return f":{entry['line']}:{entry['column']}"
    return f":{entry['line']}"


def print_results(results: List[CheckResult], output_format: str) -> None:
    if output_format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")
            for warning in result.warnings:
                print(f"::warning file={result.file_path},line={warning.get('line', 1)}::{warning['message']}")
    else:  # human-readable
        for result in results:
            if result.errors or result.warnings:
                print(f"\n{result.file_path}:")
                for error in result.errors:
                    print(f"  ERROR{_position(error)}: {error['message']}")
                for warning in result.warnings:
                    print(f"  WARNING{_position(warning)}: {warning['message']}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the check CLI."""
    parser = argparse.ArgumentParser(
        description='Check that Swagger 2.0 / OpenAPI 3.x documents can be turned into a rule context',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='+',
        help='Document files or directories to check',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help=f'Log level (default: {context_config.log_level})',
    )

    args = parser.parse_args(argv)

    if args.log_level:
        context_config.log_level = args.log_level
    context_config.set_logging()

    documents = find_documents(args.paths)

    if not documents:
        print("No documents found.", file=sys.stderr)
        sys.exit(1)

    results = check_files(documents)
    print_results(results, args.format)

    # Exit with error code if any document failed
    if any(not r.ok for r in results):
        sys.exit(1)
    if args.format == 'human':
        print("Check succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
