# =============================================================================
# run.py — Starts the backend (FastAPI) then the form client (Streamlit)
# =============================================================================
# Usage: python run.py
# Backend: http://127.0.0.1:$PORT (default 3000)
# UI: http://127.0.0.1:8501
# =============================================================================

import os
import subprocess
import sys
import threading
import time
import urllib.request
import webbrowser

from app.core.config import get_settings

BACKEND_HOST = "127.0.0.1"
STREAMLIT_PORT = 8501

# Project root (where run.py lives)
ROOT = os.path.dirname(os.path.abspath(__file__))
if ROOT:
    os.chdir(ROOT)


def wait_for_backend(url: str, timeout: float = 60.0) -> bool:
    print(f"Waiting for backend at {url}...", end="", flush=True)
    start = time.monotonic()
    while time.monotonic() - start < timeout:
        try:
            with urllib.request.urlopen(f"{url}/healthz", timeout=2) as response:
                if response.status == 200:
                    print(" Ready!")
                    return True
        except OSError:
            print(".", end="", flush=True)
            time.sleep(1)
    print(" Timeout.")
    return False


def main():
    print("Starting Prompt Builder...")
    port = get_settings().port
    backend_url = f"http://{BACKEND_HOST}:{port}"
    backend_cmd = [
        sys.executable,
        "-m", "uvicorn",
        "app.main:create_app", "--factory",
        "--host", BACKEND_HOST,
        "--port", str(port),
    ]

    print(f"Starting backend on {backend_url}...")
    backend_proc = subprocess.Popen(backend_cmd, cwd=ROOT, env=os.environ.copy())

    if not wait_for_backend(backend_url):
        print("Backend failed to start within timeout.")
        backend_proc.terminate()
        sys.exit(1)

    streamlit_cmd = [
        sys.executable,
        "-m", "streamlit",
        "run", "streamlit_app.py",
        "--server.port", str(STREAMLIT_PORT),
        "--server.address", "127.0.0.1",
        "--browser.gatherUsageStats", "false",
    ]
    front_env = os.environ.copy()
    front_env["BACKEND_URL"] = backend_url

    print(f"Starting streamlit UI on http://127.0.0.1:{STREAMLIT_PORT}...")

    def open_browser():
        time.sleep(3)
        webbrowser.open(f"http://127.0.0.1:{STREAMLIT_PORT}")

    threading.Thread(target=open_browser, daemon=True).start()

    try:
        subprocess.run(streamlit_cmd, cwd=ROOT, env=front_env)
    except KeyboardInterrupt:
        print("\nShutting down...")
    finally:
        backend_proc.terminate()
        backend_proc.wait(timeout=5)


if __name__ == "__main__":
    main()
