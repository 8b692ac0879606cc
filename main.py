"""
ReviewLens - Guest Review Analytics

CLI entry point for building the per-listing review analytics payload.
"""

import argparse
import logging
import sys

from reviewlens.agents.ingestion import IngestionAgent
from reviewlens.models.review import ReviewQuery
from reviewlens.orchestrator import ReviewPipeline
from reviewlens.utils.export import ReportExporter
from reviewlens.utils.formatting import parse_timestamp
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def date_argument(value: str) -> str:
    """argparse type: accept any parseable date, keep the original string."""
    if parse_timestamp(value) is None:
        raise argparse.ArgumentTypeError(f"Invalid date: {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ReviewLens - Guest review analytics per listing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # All listings, live Hostaway data (falls back to bundled reviews)
  python main.py

  # One listing, Airbnb reviews from Q3 2024, written to a file
  python main.py --listing-id 101 --channel airbnb \\
                 --start-date 2024-07-01 --end-date 2024-09-30 \\
                 --output output/reviews.json

  # Bundled reviews only, plus a CSV summary
  python main.py --offline --csv output/listings.csv

Note: Set HOSTAWAY_ACCOUNT_ID and HOSTAWAY_API_KEY to use live data.
        """
    )

    parser.add_argument(
        "--start-date",
        type=date_argument,
        help="Only include reviews submitted at or after this date"
    )

    parser.add_argument(
        "--end-date",
        type=date_argument,
        help="Only include reviews submitted at or before this date"
    )

    parser.add_argument(
        "--listing-id",
        help="Only include reviews for this listing"
    )

    parser.add_argument(
        "--channel",
        help="Only include reviews from this channel (case-insensitive)"
    )

    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the Hostaway API and use the bundled reviews"
    )

    parser.add_argument(
        "--output",
        help="Write the JSON response here instead of stdout"
    )

    parser.add_argument(
        "--csv",
        help="Also write a per-listing summary CSV here"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    query = ReviewQuery(
        start_date=args.start_date,
        end_date=args.end_date,
        listing_id=args.listing_id,
        channel=args.channel,
    )

    try:
        use_upstream = settings.USE_UPSTREAM and not args.offline
        pipeline = ReviewPipeline(
            ingestion_agent=IngestionAgent(use_upstream=use_upstream)
        )
        response = pipeline.run(query)

        exporter = ReportExporter()
        if args.output:
            exporter.save_json(response, args.output)
        else:
            print(exporter.to_json(response))

        if args.csv:
            exporter.save_csv(response, args.csv)

        if response.upstream_error:
            logger.warning(f"Served bundled reviews: {response.upstream_error}")

        logger.info("ReviewLens completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Run interrupted by user")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        print("Unable to load reviews. Check reviewlens.log for details", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
