"""
Launcher script for the HRM System
This script initializes the database, starts the Flask server and
automatically opens the browser
"""
import webbrowser
import threading
import time
import sys
import socket

from config import APP_NAME, HOST, PORT
from database import StorageError
from db import EXTENSION_KEY
from utils.logger import get_logger

logger = get_logger(__name__)


def is_port_in_use(port):
    """Check if a port is already in use"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex((HOST, port)) == 0


def open_browser():
    """Open browser after a short delay"""
    time.sleep(1.5)  # Wait for server to start
    url = f"http://{HOST}:{PORT}/api/dashboard-stats"
    try:
        webbrowser.open(url)
    except Exception as e:
        print(f"Could not open browser automatically: {e}")
        print(f"Please manually open: {url}")


def main():
    """Main function to start the application"""
    if is_port_in_use(PORT):
        print("=" * 50)
        print(f"WARNING: Port {PORT} is already in use!")
        print("=" * 50)
        print("Another instance might be running.")
        print("Please close it first or change HRM_PORT.")
        sys.exit(1)

    try:
        from app import create_app
        app = create_app()
    except StorageError as e:
        logger.error(f"Database initialization failed: {e}")
        print(f"\nERROR: Could not initialize the database: {e}")
        sys.exit(1)

    browser_thread = threading.Thread(target=open_browser)
    browser_thread.daemon = True
    browser_thread.start()

    try:
        print("=" * 50)
        print(APP_NAME)
        print("=" * 50)
        print(f"Server starting at http://{HOST}:{PORT}")
        print("Press Ctrl+C to stop the server")
        print("=" * 50)
        app.run(host=HOST, port=PORT, debug=False, use_reloader=False, threaded=True)
    except KeyboardInterrupt:
        print("\n\nServer stopped by user.")
        sys.exit(0)
    except OSError as e:
        logger.error(f"Server error: {e}", exc_info=True)
        if "Address already in use" in str(e):
            print(f"\n\nERROR: Port {PORT} is already in use!")
        else:
            print(f"\nError: {e}")
        sys.exit(1)
    finally:
        app.extensions[EXTENSION_KEY].close()


if __name__ == "__main__":
    main()
