import logging

import uvicorn

from mealgen.api.api_run import app
from mealgen.utilities.config import APP_HOST, APP_PORT, DEBUG, LOG_LEVEL
from mealgen.utilities.network import lan_address


def run():
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Print a friendly message that points to the URL you can open in a browser
    print(f"MealGen running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    if APP_HOST == "0.0.0.0":
        ip = lan_address()
        if ip != "127.0.0.1":
            print(f"Accessible from other devices at: http://{ip}:{APP_PORT}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    run()
