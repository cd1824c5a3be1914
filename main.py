import logging

import uvicorn

from app.main import app

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=7879, reload=False)
