import io
import logging

from flask import Flask, jsonify, render_template, request, send_file

from topsis_ranker.config import load_config
from topsis_ranker.dataset import criterion_columns, read_dataset, to_csv
from topsis_ranker.errors import EmailDeliveryError, EmptyDataset, TopsisError
from topsis_ranker.mailer import is_valid_email, send_html_email, send_result_email
from topsis_ranker.topsis import rank_dataset

app = Flask(__name__)
app.config.from_mapping(load_config())

logging.basicConfig(level=app.config["LOG_LEVEL"])
logger = logging.getLogger(__name__)

RESULT_FILENAME = "topsis_results.csv"


# -------- HELPERS --------

def read_upload():
    file = request.files.get("file")
    if file is None or not file.filename:
        raise EmptyDataset("Please upload a dataset first.")
    return read_dataset(io.BytesIO(file.read()), file.filename)


def rank_upload():
    dataset = read_upload()
    return rank_dataset(dataset, request.form.get("weights"), request.form.get("impacts"))


def best_label(result):
    label = result.label_column
    for record in result.records:
        if record["Rank"] == 1:
            return record[label]
    return None


# -------- ERRORS --------

@app.errorhandler(TopsisError)
def handle_topsis_error(exc):
    logger.warning("Rejected %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(EmailDeliveryError)
def handle_email_error(exc):
    logger.error("Email delivery failed on %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 502


# -------- ROUTES --------

@app.route("/", methods=["GET"])
def home():
    return render_template("index.html")


@app.route("/preview", methods=["POST"])
def preview():
    dataset = read_upload()
    return jsonify({
        "columns": dataset.columns,
        "records": dataset.records[:app.config["PREVIEW_ROWS"]],
        "criteria": criterion_columns(dataset.columns),
        "rows": len(dataset),
    })


@app.route("/run", methods=["POST"])
def run_topsis():
    email = request.form.get("email", "").strip()
    if email and not is_valid_email(email):
        return jsonify({"error": "Invalid email format!"}), 400

    result = rank_upload()
    best = best_label(result)

    if email:
        send_result_email(email, to_csv(result), app.config, best=best, filename=RESULT_FILENAME)

    return jsonify({
        "columns": result.columns,
        "records": result.records,
        "best": best,
        "emailed": bool(email),
    })


@app.route("/download", methods=["POST"])
def download():
    result = rank_upload()
    return send_file(
        io.BytesIO(to_csv(result).encode("utf-8")),
        mimetype="text/csv",
        as_attachment=True,
        download_name=RESULT_FILENAME,
    )


@app.route("/api/send-email", methods=["POST"])
def send_email():
    payload = request.get_json(silent=True) or {}
    email = payload.get("email")
    html = payload.get("html")
    if not email or not html:
        return jsonify({"error": "Missing email or content"}), 400

    try:
        send_html_email(email, html, app.config)
    except EmailDeliveryError:
        logger.exception("Failed to send email to %s", email)
        return jsonify({"error": "Failed to send email"}), 500

    return jsonify({"success": True})


if __name__ == "__main__":
    app.run(debug=True)
