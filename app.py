"""
Typely
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the typely package.
"""

from dotenv import load_dotenv

load_dotenv()

from typely import create_app  # noqa: E402  (load_dotenv needs to run first)

# Create the Flask application using the factory
app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=3000)
