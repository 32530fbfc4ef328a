"""
reset_data.py
-------------
Utility script to clear all stored data (bookings, vehicles, vehicle types)
from the database configured by DATABASE_URL.

This script is designed for development and testing purposes.

Usage:
    $ python reset_data.py

After running this script, you can repopulate the catalog by executing:
    $ python seeds.py
"""

from booking_app import create_app
from booking_app.services.common import STORE_KEY


def main():
    """Delete every booking, vehicle and vehicle type."""
    app = create_app()
    app.extensions[STORE_KEY].clear()

    print("✅ Database has been successfully cleared.")
    print("💡 Tip: Run `python seeds.py` to regenerate demo data.")


if __name__ == "__main__":
    main()
