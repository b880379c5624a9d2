from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import Config
from routes import health_bp, visits_bp

from models import store


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    origins = app.config["CORS_ORIGINS"]
    CORS(app, origins=origins, send_wildcard=origins == "*")

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(visits_bp)

    # Visit log (JSON file, in-memory fallback)
    store.init_app(app)
    if not store.durable:
        app.logger.warning("Visits will not survive a restart")

    @app.errorhandler(404)
    def not_found(_err):
        app.logger.debug("No route for %s %s", request.method, request.path)
        return jsonify(error="Route not found"), 404

    @app.errorhandler(Exception)
    def internal_error(err):
        if isinstance(err, HTTPException):
            return jsonify(error=err.description), err.code
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify(error="Internal server error"), 500

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        return resp

    register_cli(app)

    return app

#-------------------------
import click

def register_cli(app):
    @app.cli.command("visit-count")
    def visit_count():
        """Print the number of unique daily visits."""
        click.echo(store.total_count())

    @app.cli.command("export-visits")
    @click.argument("outfile", type=click.Path(dir_okay=False, writable=True))
    def export_visits(outfile):
        """Write the visit log document to OUTFILE."""
        payload = store.raw_dump()
        with open(outfile, "wb") as f:
            f.write(payload)
        click.echo(f"Exported {store.total_count()} visits to {outfile}")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host=app.config["HOST"], port=app.config["PORT"])
