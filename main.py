"""Main entry point for the Ticket Booking service."""

from ticket_booking.config import settings
from ticket_booking.main import app

def main():
    """Main function for CLI entry point."""
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)

if __name__ == "__main__":
    main()
