import logging
import os
import sys

import uvicorn

if __name__ == "__main__":
    # Ensure we are running from the correct directory
    sys.path.append(os.path.dirname(os.path.abspath(__file__)))
    from miplaylist.config import settings

    logging.basicConfig(level=settings.LOG_LEVEL)
    uvicorn.run("miplaylist.main:app", host=settings.HOST, port=settings.PORT, reload=True)
