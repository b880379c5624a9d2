from flask import Blueprint, jsonify

from models.visit import iso_timestamp, utcnow

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health():
    return jsonify(status="healthy", timestamp=iso_timestamp(utcnow())), 200
