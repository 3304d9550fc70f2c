"""Command line entrypoint to run the Attire Advisor locally."""

from __future__ import annotations

import argparse
import base64
import json
import sys
from pathlib import Path
from typing import List, Optional

from attire_app.app import AttireAdvisorApp
from logic.errors import AttireError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Outfit recommendations from a wardrobe photo.")
    parser.add_argument("image", type=Path, help="Path to the wardrobe photo")
    parser.add_argument("occasion", help='Occasion description, e.g. "wedding in Japan"')
    parser.add_argument("--weather", action="store_true", help="Use current weather for the mentioned location")
    parser.add_argument("--no-images", action="store_true", help="Skip example outfit photos")
    parser.add_argument("--legacy", action="store_true", help="Analyse the wardrobe and occasion in separate calls")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    image_data = base64.b64encode(args.image.read_bytes()).decode("ascii")

    app = AttireAdvisorApp()
    try:
        if args.legacy:
            response = app.recommend_from_parts(image_data, args.occasion, include_images=not args.no_images)
        else:
            response = app.recommend(
                image_data,
                args.occasion,
                use_weather_aware=args.weather,
                include_images=not args.no_images,
            )
    except AttireError as exc:
        print(json.dumps({"error": str(exc), "code": exc.code}), file=sys.stderr)
        return 1

    print(json.dumps(response.to_payload(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
