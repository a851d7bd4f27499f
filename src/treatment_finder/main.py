"""
Treatment Finder - Main Entry Point

Usage:
    python -m src.treatment_finder.main --concern "I have type 2 diabetes and high cholesterol"
    python -m src.treatment_finder.main --condition hypertension --medication lisinopril
    python -m src.treatment_finder.main --health-check
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from src.treatment_finder.api_clients.brave_search_client import BraveSearchClient
from src.treatment_finder.config import ConfigurationError, get_config, validate_config
from src.treatment_finder.factory import create_treatment_processor
from src.treatment_finder.models import TreatmentRequest
from src.treatment_finder.utils.logger import configure_logging, get_logger


def run_health_check() -> int:
    """Check configuration and search provider connectivity."""
    logger = get_logger()
    config = get_config()

    logger.info("\n" + "=" * 60)
    logger.info("SYSTEM HEALTH CHECK")
    logger.info("=" * 60 + "\n")

    if not config.search.search_api_key:
        logger.error("  ✗ Brave Search: BRAVE_API_KEY not set")
        return 1

    client = BraveSearchClient.from_config(config.search)
    if client.health_check():
        logger.info("  ✓ Brave Search: Accessible")
        return 0

    logger.error("  ✗ Brave Search: Health check failed")
    return 1


def run_comparison(request: TreatmentRequest, as_json: bool = False) -> int:
    """Run one comparison and print the card (or the data envelope)."""
    processor = create_treatment_processor()
    response = processor.process(request)

    if as_json:
        print(json.dumps(response.to_payload(), indent=2, ensure_ascii=False))
    else:
        print(response.text)
        print()
        print(response.card_content)

    return 0 if response.success else 1


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Treatment Finder - Compare treatment options and prices for medical conditions"
    )

    parser.add_argument("--concern", type=str, help="Free-text health concern")
    parser.add_argument("--condition", action="append", default=[],
                        help="Pre-identified condition (repeatable)")
    parser.add_argument("--medication", action="append", default=[],
                        help="Pre-identified medication (repeatable)")
    parser.add_argument("--json", action="store_true",
                        help="Print the data envelope as JSON instead of the card")
    parser.add_argument("--health-check", action="store_true",
                        help="Check connectivity to the search provider")
    parser.add_argument("--log-level", type=str, default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Override LOG_LEVEL")

    args = parser.parse_args()

    # Load config first so logging honours LOG_DIR / LOG_LEVEL
    config = get_config(validate=False)
    logger = configure_logging(config.logging, level_override=args.log_level)

    try:
        validate_config(config, strict=False)

        if args.health_check:
            sys.exit(run_health_check())

        elif args.concern or args.condition:
            request = TreatmentRequest(
                primary_concern=args.concern,
                pre_identified_conditions=args.condition,
                pre_identified_medications=args.medication,
            )
            sys.exit(run_comparison(request, as_json=args.json))

        else:
            parser.print_help()
            sys.exit(1)

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
