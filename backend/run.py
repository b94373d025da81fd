"""
Start the TripMaster API server.

Usage:
    python run.py
"""
from tripmaster.main import run

if __name__ == "__main__":
    run()
