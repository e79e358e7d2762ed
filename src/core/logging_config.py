import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO"):
    """Настраивает корневой логгер один раз на всё приложение"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # motor/pymongo слишком шумные на DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)
