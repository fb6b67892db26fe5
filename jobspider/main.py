"""
Main batch runner for all job spiders.

Runs every enabled spider sequentially, or a selected subset, and prints a
summary of the results.
"""

import sys
import logging
import importlib
from datetime import datetime
import time
from typing import Dict, List, Optional

from jobspider import settings
from jobspider.core.storage import JobStore

logger = logging.getLogger("jobspider.main")

# Spider modules
SCRAPERS = {
    'NSW': {
        'name': 'NSW Government (iworkfor.nsw.gov.au)',
        'module': 'jobspider.NSW.nsw_scraper',
        'enabled': True
    },
    'SEEK': {
        'name': 'SEEK (seek.com.au)',
        'module': 'jobspider.SEEK.seek_scraper',
        'enabled': True
    }
}


def setup_batch_logging():
    """Log the batch run to console and logs/batch_run_<timestamp>.log."""
    settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = settings.LOGS_DIR / f"batch_run_{timestamp}.log"

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

    # Console output goes through the package logger shared with the spiders
    package_logger = logging.getLogger("jobspider")
    package_logger.setLevel(logging.INFO)
    if not any(type(h) is logging.StreamHandler for h in package_logger.handlers):
        package_logger.addHandler(logging.StreamHandler(sys.stdout))
    return log_file


def run_scraper(code: str) -> Dict:
    """
    Run a single spider and return results.

    Args:
        code: Source code (e.g., 'NSW', 'SEEK')

    Returns:
        Dict with results including success status, jobs scraped, and timing
    """
    scraper_info = SCRAPERS.get(code)

    if not scraper_info:
        logger.error(f"Unknown source: {code}")
        return {
            'source': code,
            'success': False,
            'error': 'Unknown source'
        }

    logger.info("=" * 80)
    logger.info(f"Starting spider: {scraper_info['name']} ({code})")
    logger.info("=" * 80)

    start_time = time.time()

    try:
        module = importlib.import_module(scraper_info['module'])
        module.main()

        elapsed_time = time.time() - start_time

        latest = JobStore(settings.DATA_DIR, code).latest_result_file()

        result = {
            'source': code,
            'name': scraper_info['name'],
            'success': True,
            'result_file': str(latest) if latest else None,
            'elapsed_time': elapsed_time,
            'elapsed_time_formatted': f"{elapsed_time/60:.1f} minutes"
        }

        logger.info(f"✓ {scraper_info['name']} completed successfully")
        logger.info(f"  Result file: {result['result_file']}")
        logger.info(f"  Time taken: {elapsed_time/60:.1f} minutes")

        return result

    except Exception as e:
        elapsed_time = time.time() - start_time
        logger.error(f"✗ {scraper_info['name']} failed: {str(e)}")

        return {
            'source': code,
            'name': scraper_info['name'],
            'success': False,
            'error': str(e),
            'elapsed_time': elapsed_time
        }


def run_batch(sources: Optional[List[str]] = None) -> List[Dict]:
    """
    Run multiple spiders in sequence.

    Args:
        sources: List of source codes to run. If None, runs all enabled.
    """
    logger.info("")
    logger.info("=" * 80)
    logger.info("JOB SPIDER - BATCH RUN")
    logger.info("=" * 80)
    logger.info(f"Start time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    if sources:
        to_run = [s for s in sources if s in SCRAPERS]
        logger.info(f"Running selected sources: {', '.join(to_run)}")
    else:
        to_run = [code for code, info in SCRAPERS.items() if info['enabled']]
        logger.info(f"Running all enabled sources: {', '.join(to_run)}")

    results = []
    overall_start = time.time()

    for i, code in enumerate(to_run, 1):
        logger.info(f"\n[{i}/{len(to_run)}] Running {SCRAPERS[code]['name']}...")
        results.append(run_scraper(code))
        logger.info("")

    overall_elapsed = time.time() - overall_start

    logger.info("=" * 80)
    logger.info("BATCH RUN SUMMARY")
    logger.info("=" * 80)

    successful = [r for r in results if r['success']]
    failed = [r for r in results if not r['success']]

    logger.info(f"Total spiders run: {len(results)}")
    logger.info(f"Successful: {len(successful)}")
    logger.info(f"Failed: {len(failed)}")
    logger.info(f"Total time: {overall_elapsed/60:.1f} minutes")

    for r in successful:
        logger.info(f"  ✓ {r['name']}: {r.get('result_file')} ({r.get('elapsed_time_formatted', 'N/A')})")
    for r in failed:
        logger.info(f"  ✗ {r['name']}: {r.get('error', 'Unknown error')}")

    logger.info(f"End time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info("=" * 80)

    return results


def main():
    """Main entry point with command-line argument handling."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Run job spiders in batch mode',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run all spiders
  python -m jobspider.main

  # Run specific sources
  python -m jobspider.main --sources NSW

  # List available spiders
  python -m jobspider.main --list
        """
    )

    parser.add_argument(
        '--sources', '-s',
        nargs='+',
        choices=list(SCRAPERS.keys()),
        help='Specific sources to run (default: all enabled)'
    )

    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help='List available spiders and exit'
    )

    args = parser.parse_args()

    if args.list:
        print("\nAvailable spiders:")
        print("-" * 60)
        for code, info in SCRAPERS.items():
            status = "✓" if info['enabled'] else "✗"
            print(f"{status} {code:4s} - {info['name']}")
        print("-" * 60)
        print(f"Total: {len(SCRAPERS)} spiders")
        print()
        return

    log_file = setup_batch_logging()
    logger.info(f"Log file: {log_file}")

    results = run_batch(sources=args.sources)

    # Exit with error code if any spider failed
    if any(not r['success'] for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
