# credhash/utils/logging.py
import logging

logger = logging.getLogger("credhash")
logger.addHandler(logging.NullHandler())
