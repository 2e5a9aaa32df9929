from bread.app import app, PORT
from bread.util.log import log_info


if __name__ == "__main__":
    log_info(f"[HTTP] Flask server starting on port {PORT}")
    app.run(port=PORT)
