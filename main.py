from api.app import create_app
from core.pdf_imager.logging import configure_logging

app = create_app()
configure_logging(app.state.config.runtime.log_level, app.state.config.runtime.log_format)
