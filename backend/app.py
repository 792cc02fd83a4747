import os
import logging
from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from data_access.api_queries import get_top_scores, record_score
from domain.constants import TOP_SCORES_LIMIT

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

DEFAULT_PORT = 3000

# Enable CORS for API routes so the game front end (different origin) can call Flask
# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})


def serialize_score(record):
    """Shape a stored score record for the leaderboard response."""
    return {
        "_id": str(record["id"]),
        "score": record["score"],
        "date": record.get("date"),
        "duration": record["duration"],
        "createdAt": record.get("created_at"),
    }


@app.route("/api/scores", methods=["GET"])
def get_scores():
    """
    Get the leaderboard.

    Returns up to five records ordered by score, highest first.
    """
    try:
        scores = get_top_scores(limit=TOP_SCORES_LIMIT)
        return jsonify([serialize_score(record) for record in scores])

    except Exception as error:
        logging.error(f"Error getting high scores: {error}")
        return jsonify({"error": "Error retrieving scores"}), 500


@app.route("/api/scores", methods=["POST"])
def post_score():
    """
    Record a finished game.

    Expected JSON body: {"score": number, "duration": number, "date": string}

    The values are stored as sent; createdAt is stamped by the server.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        record_score(
            score=payload.get("score"),
            duration=payload.get("duration"),
            date=payload.get("date"),
        )
        return jsonify({"message": "Score saved successfully"}), 201

    except Exception as error:
        logging.error(f"Error saving score: {error}")
        return jsonify({"error": "Error saving score"}), 500


if __name__ == "__main__":
    port = int(os.getenv("PORT", DEFAULT_PORT))
    logging.info(f"Backend server running on port {port}")
    app.run(host="0.0.0.0", port=port, debug=bool(os.getenv("FLASK_DEBUG")))
