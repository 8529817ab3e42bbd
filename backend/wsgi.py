import logging

try:
    from backend.petitbac.server import create_app
except ImportError:  # pragma: no cover
    from petitbac.server import create_app

logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")

app, socketio = create_app()
