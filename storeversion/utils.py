import logging


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


def getLogger(name="storeversion"):
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    return logger


def replace_all(text: str, replacements) -> str:
    """Apply ordered (old, new) string replacements."""
    for old, new in replacements:
        text = text.replace(old, new)
    return text
