from .health import health_bp
from .visits import visits_bp
