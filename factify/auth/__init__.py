from flask import Blueprint

# Blueprint for account related endpoints
account_bp = Blueprint("account", __name__, url_prefix="/api/account")

# Import routes so that they are registered with the blueprint
from factify.auth import routes  # noqa: E402,F401
