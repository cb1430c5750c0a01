import logging
import sys

def setup_logging(level=logging.INFO):
    """
    Setup logging configuration.
    """
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    # stdout is reserved for the encoded payload
    handlers = [
        logging.StreamHandler(sys.stderr)
    ]

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=log_format,
        handlers=handlers,
        force=True
    )
    
    return logging.getLogger("CredentialCodec")
