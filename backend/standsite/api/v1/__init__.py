from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import health
from . import auth
from . import sections
from . import collections
from . import events
from . import event_categories
from . import event_images
from . import images
from . import company_profile
from . import contact
from . import admin
from . import event_submissions
from . import blog
from . import cities
