"""
Flask blueprints for the Fieldnote API.
"""

from flask import Blueprint

# Create blueprints
projects_bp = Blueprint('projects', __name__)
interviews_bp = Blueprint('interviews', __name__)
tags_bp = Blueprint('tags', __name__)
insights_bp = Blueprint('insights', __name__)
template_bp = Blueprint('template', __name__)

# Import routes to register them
from . import projects  # noqa: E402, F401
from . import interviews  # noqa: E402, F401
from . import tags  # noqa: E402, F401
from . import template  # noqa: E402, F401
from . import insights  # noqa: E402, F401
