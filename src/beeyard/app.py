from flask import Flask, g

from beeyard.log import configure_logging


def create_app(database_url: str = None) -> Flask:
    """
    Application factory.

    Each request that touches the store opens its own connection to
    ``database_url`` (the configured URL by default) and closes it when the
    request ends, so concurrent requests never share a transaction.
    """
    from beeyard.config import config

    configure_logging(config.log_level)

    app = Flask(__name__)
    app.config["DATABASE_URL"] = database_url or config.database_url

    @app.teardown_appcontext
    def close_data_service(exc):
        data = g.pop("beeyard", None)
        if data is not None:
            data.close()

    # Register blueprints
    from beeyard.api.apiaries import bp as apiaries_bp
    from beeyard.api.hives import bp as hives_bp
    from beeyard.api.recordings import bp as recordings_bp

    app.register_blueprint(apiaries_bp, url_prefix="/api/apiaries")
    app.register_blueprint(hives_bp, url_prefix="/api/hives")
    app.register_blueprint(recordings_bp, url_prefix="/api/hives")

    @app.route("/api/records/next-id")
    def next_record_id():
        from beeyard.api import data_service, respond

        return respond(data_service().records.get_next_record_id())

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    return app
