"""Run the helpdesk API with uvicorn: `python main.py` (honours PORT, default 8080)."""

from helpdesk.main import app, run  # noqa: F401

if __name__ == "__main__":
    run()
