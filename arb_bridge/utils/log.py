import logging

logger = logging.getLogger("arb_bridge")


def arb_log(title: str):
    """Log the banner every example script opens with."""
    logger.info("=" * 60)
    logger.info(f" Arbitrum Demo: {title} ")
    logger.info("=" * 60)
