"""Development server: ``python run.py`` from the backend directory."""
import os

from quizpro import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
