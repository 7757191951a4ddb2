"""Flask application serving the translation table API.

The server only wires configuration, logging and the ``wordtable`` blueprint
together; all table logic lives in the package. Responses are compressed
because generated tables for large projects easily reach several hundred
kilobytes.
"""

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_compress import Compress

from wordtable.api import bp as wordtable_bp
from wordtable.config import Settings, load_settings


# Custom StreamHandler to handle encoding errors
class SafeEncodingStreamHandler(logging.StreamHandler):
    def emit(self, record):
        """Write log lines without failing on consoles that cannot show every word."""
        try:
            msg = self.format(record)
            stream = self.stream
            stream.write(msg.encode('utf-8', errors='replace').decode('utf-8', errors='ignore') + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def configure_logging(level: str) -> None:
    root_logger = logging.getLogger()

    # Remove any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
    safe_handler = SafeEncodingStreamHandler(sys.stdout)
    safe_handler.setFormatter(formatter)
    root_logger.addHandler(safe_handler)
    root_logger.setLevel(getattr(logging, level, logging.WARNING))


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create the Flask instance.

    Gunicorn calls this factory once per worker and receives the WSGI object.
    """
    if settings is None:
        load_dotenv()
        settings = load_settings()
        configure_logging(settings.log_level)

    app = Flask(__name__)
    # Translations are mostly non-ASCII, keep them readable in JSON responses.
    app.json.ensure_ascii = False
    app.config.update(WORDTABLE_SETTINGS=settings)
    Compress(app)

    app.register_blueprint(wordtable_bp)
    logger.info(
        "wordtable API ready (indent=%d, quotes=%s)", settings.indent, settings.quotes
    )
    return app


if __name__ == '__main__':
    port = int(os.getenv("PORT", "8000"))
    create_app().run(host="127.0.0.1", port=port)
