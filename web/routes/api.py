"""REST API v1 — JSON endpoints for products, events, files and exports."""

import io
import logging
from flask import Blueprint, current_app, jsonify, request, send_file

from tracker.dates import utcnow
from tracker.errors import PartialCreationError, StoreError, ValidationError
from tracker.export import export_filename, export_timeline, render_export
from tracker.status import days_until_expiry, event_color_class, warranty_status
from tracker.timeline import group_files_by_type
from web.services import get_assembler

logger = logging.getLogger(__name__)

bp = Blueprint("api", __name__)


def _assembler():
    return get_assembler(current_app.config.get("RECORD_STORE"))


def _error(message, status=400):
    return jsonify({"error": message}), status


@bp.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify(e.to_dict()), 400


@bp.errorhandler(PartialCreationError)
def handle_partial_creation(e):
    return jsonify(e.to_dict()), 502


@bp.errorhandler(StoreError)
def handle_store_error(e):
    return jsonify(e.to_dict()), 502


def _product_summary(product, now):
    data = product.to_dict()
    data["warranty_status"] = warranty_status(product, now).value
    data["days_until_expiry"] = days_until_expiry(product, now.date())
    return data


# ── Products ─────────────────────────────────────────────────────────

@bp.route("/products")
def list_products():
    now = utcnow()
    products = _assembler().list_products()
    return jsonify([_product_summary(p, now) for p in products])


@bp.route("/products", methods=["POST"])
def add_product():
    data = request.get_json(silent=True) or {}
    product = _assembler().create_product_with_purchase_event(data)
    return jsonify(_product_summary(product, utcnow())), 201


@bp.route("/products/<product_id>")
def get_product(product_id):
    product = _assembler().get_product(product_id)
    if not product:
        return _error("Product not found", 404)
    return jsonify(_product_summary(product, utcnow()))


# ── Events ───────────────────────────────────────────────────────────

@bp.route("/products/<product_id>/events")
def list_events(product_id):
    assembler = _assembler()
    if not assembler.get_product(product_id):
        return _error("Product not found", 404)
    events = assembler.load_timeline(product_id)
    result = []
    for e in events:
        item = e.to_dict()
        item["color_class"] = event_color_class(e.event_type)
        result.append(item)
    return jsonify(result)


@bp.route("/products/<product_id>/events", methods=["POST"])
def add_event(product_id):
    assembler = _assembler()
    if not assembler.get_product(product_id):
        return _error("Product not found", 404)
    data = request.get_json(silent=True) or {}
    event = assembler.add_event(product_id, data, today=utcnow().date())
    return jsonify(event.to_dict()), 201


@bp.route("/products/<product_id>/purchase-event", methods=["POST"])
def retry_purchase_event(product_id):
    """Record the purchase event for a product left without one.

    Answers 200 with the stored event when it already exists.
    """
    assembler = _assembler()
    product = assembler.get_product(product_id)
    if not product:
        return _error("Product not found", 404)
    existing = assembler.find_purchase_event(product_id)
    if existing:
        return jsonify(existing.to_dict()), 200
    event = assembler.add_purchase_event(product)
    return jsonify(event.to_dict()), 201


# ── Files & export ───────────────────────────────────────────────────

@bp.route("/products/<product_id>/files")
def list_files(product_id):
    assembler = _assembler()
    if not assembler.get_product(product_id):
        return _error("Product not found", 404)
    grouped = group_files_by_type(assembler.load_files(product_id))
    return jsonify({
        kind: [f.to_dict() for f in files] for kind, files in grouped.items()
    })


@bp.route("/products/<product_id>/export")
def export_product_timeline(product_id):
    assembler = _assembler()
    product = assembler.get_product(product_id)
    if not product:
        return _error("Product not found", 404)
    document = export_timeline(product, assembler.load_timeline(product_id))
    filename = export_filename(product.name)
    logger.info("Exporting timeline for product %s", product_id)
    return send_file(
        io.BytesIO(render_export(document).encode("utf-8")),
        mimetype="application/json",
        as_attachment=True,
        download_name=filename,
    )
