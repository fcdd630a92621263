# pvp_arena/__main__.py
import logging

from .app import create_app


def main():
    app, socketio = create_app()
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    socketio.run(app, host=app.config["HOST"], port=int(app.config["PORT"]), allow_unsafe_werkzeug=True)


if __name__ == "__main__":
    main()
