from app.config.bootstrap import bootstrap
from app.config.logging_setup import setup_logging
from app.config.settings import settings

def seed():
    print(f"Seeding {settings.DATABASE_URL}")
    bootstrap()
    print("Seeding completed successfully!")

if __name__ == "__main__":
    setup_logging()
    seed()
