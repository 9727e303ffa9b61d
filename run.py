# run.py
import os
import uvicorn
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler("summitbook.log")
    ]
)

logger = logging.getLogger(__name__)

def main():
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5100"))
    logger.info(f"Starting Summitbook checkout API on {host}:{port}")

    uvicorn.run(
        "summitbook.main:app",
        host=host,
        port=port,
    )

if __name__ == "__main__":
    main()
