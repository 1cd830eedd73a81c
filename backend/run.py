from tictactoe import create_app, socketio


def run_options(flask_app):
    """Keyword arguments for ``socketio.run``.

    Werkzeug's server is only allowed when DEBUG is on; production should
    use an eventlet/gevent worker instead.
    """
    debug = bool(flask_app.config.get('DEBUG'))
    return {
        'host': flask_app.config['HOST'],
        'port': flask_app.config['PORT'],
        'debug': debug,
        'allow_unsafe_werkzeug': debug,
    }


app = create_app()

if __name__ == '__main__':
    options = run_options(app)
    app.logger.info('Tic Tac Toe Socket.IO server')
    app.logger.info(f"Server running on {options['host']}:{options['port']}")
    app.logger.info(f"Health check: http://localhost:{options['port']}/health")
    socketio.run(app, **options)
