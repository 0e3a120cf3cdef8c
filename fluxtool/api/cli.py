"""
One-shot command line adapter for the text-to-image tool.

Architectural role:
- Parse command line flags into a `GenerateImageRequest`.
- Delegate the invocation to `fluxtool.core.engine.generate_image_from_text`.
- Print the resulting message to stdout.

Exit codes:
- 0: image saved (requested location or fallback).
- 1: the tool reported a failure.
- 2: invalid input.

Logging:
- Configured here only, on stderr; level from `LOG_LEVEL` (default `INFO`).
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import asyncio
import logging
import os
import sys

from pydantic import ValidationError

from fluxtool.api.schemas import GenerateImageRequest
from fluxtool.core.engine import generate_image_from_text
from fluxtool.image.provider_config import STEPS_DEFAULT, TOOL_DESCRIPTION


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fluxtool", description=TOOL_DESCRIPTION)
    parser.add_argument("--prompt", required=True, help="Text description of the image")
    parser.add_argument("--steps", type=int, default=STEPS_DEFAULT, help="Diffusion steps (1-8)")
    parser.add_argument("--output-path", required=True, help="Absolute output directory")
    parser.add_argument("--filename", required=True, help="File name without extension")
    return parser


def _configure_logging():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    """Run one invocation and return the process exit code."""
    args = build_parser().parse_args(argv)
    _configure_logging()

    try:
        request = GenerateImageRequest(
            prompt=args.prompt,
            steps=args.steps,
            outputPath=args.output_path,
            filename=args.filename,
        )
    except ValidationError as e:
        print(f"Invalid input:\n{e}", file=sys.stderr)
        return 2

    result = asyncio.run(
        generate_image_from_text(
            prompt=request.prompt,
            steps=request.steps,
            output_path=request.outputPath,
            filename=request.filename,
        )
    )

    print(result.text)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
