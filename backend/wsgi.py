import os

from standsite import create_app

app = create_app(os.getenv("FLASK_CONFIG", "development"))
