"""
Serverless entry point.

The app, and with it the MongoDB pool, is created once per warm instance
and reused across invocations.
"""

from app import create_app

# Create the Flask application instance
app = create_app()

# Vercel expects the WSGI application to be named 'app'
if __name__ == "__main__":
    # This won't be called in Vercel, but useful for local testing
    app.run(debug=False, host="0.0.0.0", port=app.settings.port)
