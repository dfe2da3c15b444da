"""
TokenCalc
Main application entry point
"""
import socket
import config
from api import create_app
from calculator import Calculator
from database import Database
from history_manager import HistoryManager


def get_local_ip():
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        # doesn't even have to be reachable
        s.connect(('10.255.255.255', 1))
        IP = s.getsockname()[0]
        s.close()
    except OSError:
        IP = '127.0.0.1'
    return IP


def build_calculator(db_path=config.DB_PATH):
    """Create a calculator whose history lives in the SQLite store"""
    return Calculator(HistoryManager(Database(db_path)))


def main():
    app = create_app(build_calculator())

    ip = get_local_ip()
    print("=" * 60)
    print(f"{config.APP_NAME} {config.VERSION} web API")
    print(f"Access on this PC:    http://localhost:{config.WEB_PORT}/api")
    print(f"Access on your Phone: http://{ip}:{config.WEB_PORT}/api")
    print("=" * 60)

    # One calculator is shared by every request
    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False, threaded=False)


if __name__ == "__main__":
    main()
