#!/usr/bin/env python3
"""
Script to analyze a local car purchase contract file with Gemini
"""

import argparse
import json
import logging
import mimetypes
import os
import sys

from autotruth.models.analysis import UploadedFile
from autotruth.services.analyzer import ContractAnalyzer
from autotruth.services.llm import build_gemini_client


def load_upload(path: str, mime_type: str = None) -> UploadedFile:
    with open(path, "rb") as f:
        content = f.read()
    return UploadedFile(
        content=content,
        size=os.path.getsize(path),
        content_type=mime_type or mimetypes.guess_type(path)[0] or "application/octet-stream",
        filename=os.path.basename(path),
    )


def main(argv=None, analyzer: ContractAnalyzer = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a car purchase contract (image or PDF)")
    parser.add_argument("path", help="Contract image or PDF")
    parser.add_argument("--mime-type", help="Override the media type guessed from the file name")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        upload = load_upload(args.path, args.mime_type)
    except OSError as e:
        print(f"Error reading {args.path}: {e}", file=sys.stderr)
        return 1

    analyzer = analyzer or ContractAnalyzer(client=build_gemini_client())
    outcome = analyzer.analyze(upload)
    print(json.dumps(outcome.to_response(), indent=2))

    if not outcome.success:
        return 1
    print(f"Trustworthiness: {outcome.data.trustworthiness_score}/100 ({outcome.data.score_band()})", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
