"""
Celery worker entry point
Sends booking notification emails
"""
import logging

from celery.signals import worker_ready, worker_shutdown

from app.config.celery_config import celery_app
from app.utils.my_logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@worker_ready.connect
def worker_ready_handler(sender=None, **kwargs):
    """Handle worker startup"""
    tasks = sorted(name for name in celery_app.tasks if not name.startswith("celery."))
    logger.info(f"Celery worker ready, registered tasks: {tasks}")


@worker_shutdown.connect
def worker_shutdown_handler(sender=None, **kwargs):
    """Handle worker shutdown"""
    logger.info("Celery worker shutting down")


if __name__ == "__main__":
    celery_app.start([
        "worker",
        "--loglevel=info",
        "--queues=notifications",
        "--concurrency=2",
        "--max-tasks-per-child=1000"
    ])
