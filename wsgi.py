# wsgi.py
from reride import create_app

application = create_app()
