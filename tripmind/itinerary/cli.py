"""Command-line interface for itinerary rendering and generation."""

import argparse
import json
import sys
from pathlib import Path

from tripmind.common.errors import TripMindError, ValidationError
from tripmind.common.validation import validate_trip_input
from tripmind.planner.generator import TripGenerator
from .classifier import classify
from .renderer import render
from .web_view import ItineraryWebView


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render or generate travel itineraries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the display blocks of an itinerary text file as JSON
  python -m tripmind.itinerary.cli trip.txt

  # Write the blocks to a file and a standalone HTML page
  python -m tripmind.itinerary.cli trip.txt --json blocks.json --web trip.html

  # Read the itinerary from stdin
  cat trip.txt | python -m tripmind.itinerary.cli -

  # Generate a new itinerary with Claude and render it
  python -m tripmind.itinerary.cli --generate --destination "Kyoto, Japan" --days 4 --budget "$2000" --web kyoto.html
        """,
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        help="Path to an itinerary text file, or - for stdin",
    )
    parser.add_argument("--json", type=str, metavar="OUTPUT_PATH", help="Write display blocks as JSON")
    parser.add_argument("--web", type=str, metavar="OUTPUT_PATH", help="Write a standalone HTML page")
    parser.add_argument("--title", type=str, default=None, help="Page title for --web")
    parser.add_argument("--segments", action="store_true", help="Output classified segments instead of display blocks")

    generate = parser.add_argument_group("generation")
    generate.add_argument("--generate", action="store_true", help="Generate the itinerary with Claude")
    generate.add_argument("--destination", type=str, help="Trip destination")
    generate.add_argument("--days", type=int, help="Trip length in days (1-30)")
    generate.add_argument("--budget", type=str, help="Budget description, e.g. '$1500'")
    generate.add_argument("--interests", type=str, default="", help="Interests, e.g. 'food, museums'")
    generate.add_argument("--save-text", type=str, metavar="OUTPUT_PATH", help="Save generated itinerary text")
    generate.add_argument("--api-key", type=str, help="Anthropic API key (or set ANTHROPIC_API_KEY env var)")

    return parser


def read_itinerary(input_file: str) -> str:
    if input_file == "-":
        return sys.stdin.read()
    path = Path(input_file)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_text()


def generate_itinerary(args) -> str:
    request = validate_trip_input({
        "destination": args.destination,
        "duration": args.days,
        "budget": args.budget,
        "interests": args.interests,
    })
    print(f"Generating {request.duration}-day itinerary for {request.destination}...", file=sys.stderr)
    text = TripGenerator(api_key=args.api_key).generate(request)

    if args.save_text:
        output_path = Path(args.save_text)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text)
        print(f"Itinerary text saved to: {args.save_text}", file=sys.stderr)
    return text


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.generate and not args.input_file:
        parser.error("an input file is required unless --generate is given")

    try:
        if args.generate:
            text = generate_itinerary(args)
            title = args.title or f"{args.days} days in {args.destination}"
        else:
            text = read_itinerary(args.input_file)
            title = args.title or (Path(args.input_file).stem if args.input_file != "-" else "Itinerary")

        segments = classify(text)
        items = segments if args.segments else render(segments)
        data = [item.to_dict() for item in items]

        if args.json:
            output_path = Path(args.json)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w") as f:
                json.dump(data, f, indent=2)
            print(f"JSON data saved to: {args.json}", file=sys.stderr)

        if args.web:
            ItineraryWebView().generate(text, output_path=args.web, title=title)
            print(f"Web view saved to: {args.web}", file=sys.stderr)

        # Default output if no specific output requested
        if not args.json and not args.web:
            print(json.dumps(data, indent=2, ensure_ascii=False))

    except ValidationError as e:
        for detail in e.details:
            print(f"Error: {detail['message']}", file=sys.stderr)
        return 2
    except (TripMindError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
