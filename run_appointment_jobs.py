"""
Appointment Background Jobs Runner
Run this as a separate process: python run_appointment_jobs.py
"""

import asyncio
import logging
import sys

from app.workers.appointment_jobs import run_appointment_jobs

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("🚀 Starting appointment background jobs...")
    try:
        asyncio.run(run_appointment_jobs())
    except KeyboardInterrupt:
        logger.info("👋 Appointment jobs stopped by user")
    except Exception as e:
        logger.error(f"❌ Appointment jobs crashed: {e}")
        sys.exit(1)
