"""
Flask-based Web API for claw-readme.

Provides REST endpoints for README generation from uploaded Node.js
projects or GitHub URLs.

Endpoints:
    POST /api/generate - Generate README from uploaded zip or GitHub URL
    POST /api/analysis - Get the analysis without rendering
    GET /api/health - Health check endpoint

The help probe executes project code, so it is off unless the request
asks for it with probe=true.
"""

import subprocess
import tempfile
import zipfile
from pathlib import Path
from typing import Any, Optional

from flask import Flask, Response, jsonify, request

from claw_readme import __version__
from claw_readme.analyzer import AnalysisOptions, analyze_project
from claw_readme.errors import ClawReadmeError
from claw_readme.renderer import RenderOptions, render_readme

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 20 * 1024 * 1024  # 20MB max upload

OUTPUT_FORMATS = {"markdown", "json", "both"}


def clone_github_repo(github_url: str, target_dir: Path) -> None:
    """
    Clone a GitHub repository to a target directory.

    Args:
        github_url: The GitHub repository URL (HTTPS or SSH).
        target_dir: The directory to clone into.

    Raises:
        ValueError: If git clone fails.
    """
    if not github_url.endswith(".git"):
        github_url = github_url.rstrip("/") + ".git"

    try:
        subprocess.run(
            ["git", "clone", "--depth", "1", github_url, str(target_dir)],
            check=True,
            capture_output=True,
            timeout=60,
        )
    except subprocess.CalledProcessError as e:
        raise ValueError(f"Failed to clone repository: {e.stderr.decode(errors='replace')}")
    except subprocess.TimeoutExpired:
        raise ValueError("Repository clone timed out (60s limit)")
    except FileNotFoundError:
        raise ValueError("git is not installed on the server")


def extract_zip(zip_file, target_dir: Path) -> None:
    """
    Extract a zip file to a target directory.

    Args:
        zip_file: The uploaded zip file object.
        target_dir: The directory to extract into.

    Raises:
        ValueError: If extraction fails or zip is invalid.
    """
    try:
        with zipfile.ZipFile(zip_file, "r") as zf:
            # Prevent path traversal
            for member in zf.namelist():
                member_path = Path(member)
                if member_path.is_absolute() or ".." in member_path.parts:
                    raise ValueError(f"Invalid path in zip: {member}")
            zf.extractall(target_dir)
    except zipfile.BadZipFile:
        raise ValueError("Invalid or corrupted zip file")


def find_project_root(extracted_dir: Path) -> Path:
    """
    Find the actual project root after extraction.

    GitHub archives wrap everything in a single top-level directory
    (e.g. repo-main/); descend into it when that is all there is.
    """
    contents = list(extracted_dir.iterdir())

    if len(contents) == 1 and contents[0].is_dir():
        return contents[0]

    return extracted_dir


def _flag(value: Any, default: bool = False) -> bool:
    """Read a boolean option given as a JSON bool or a query string."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("1", "true", "yes")


def _request_options() -> dict[str, Any]:
    """Collect options from a JSON body or from form/query parameters."""
    if request.is_json:
        data = request.get_json(silent=True)
        get = (data if isinstance(data, dict) else {}).get
    else:
        def get(key, default=None):
            return request.form.get(key, request.args.get(key, default))

    return {
        "github_url": get("github_url"),
        "include_badges": _flag(get("include_badges")),
        "probe": _flag(get("probe")),
        "format": str(get("format", "both") or "both"),
    }


def process_project(
    project_path: Path,
    render_options: RenderOptions,
    probe: bool = False,
) -> tuple[str, dict[str, Any]]:
    """
    Analyze a project directory and render its README.

    Args:
        project_path: Path to the project directory.
        render_options: Render options for the README.
        probe: Whether to run the project's --help.

    Returns:
        Tuple of (rendered_readme, analysis_dict).
    """
    result = analyze_project(project_path, AnalysisOptions.from_env(probe=probe))
    return render_readme(result, render_options), result.to_dict()


def _handle(output_format: Optional[str] = None) -> tuple[Response, int]:
    options = _request_options()
    output_format = output_format or options["format"]
    if output_format not in OUTPUT_FORMATS:
        return jsonify({"error": f"Unknown format: {output_format}"}), 400

    render_options = RenderOptions(include_badges=options["include_badges"])

    with tempfile.TemporaryDirectory() as tmpdir:
        project_path = Path(tmpdir) / "project"
        project_path.mkdir()

        try:
            if options["github_url"]:
                clone_github_repo(options["github_url"], project_path)
            elif "file" in request.files:
                uploaded_file = request.files["file"]
                if not uploaded_file.filename:
                    return jsonify({"error": "No file selected"}), 400

                if not uploaded_file.filename.endswith(".zip"):
                    return jsonify({"error": "Only .zip files are supported"}), 400

                extract_zip(uploaded_file, project_path)
                project_path = find_project_root(project_path)
            else:
                return (
                    jsonify({"error": "Either 'github_url' or 'file' upload required"}),
                    400,
                )

            readme_content, analysis = process_project(
                project_path, render_options, probe=options["probe"]
            )
        except (ValueError, ClawReadmeError) as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            app.logger.exception("Processing failed")
            return jsonify({"error": f"Processing failed: {e}"}), 500

    response_data: dict[str, Any] = {"success": True}
    if output_format in ("markdown", "both"):
        response_data["readme"] = readme_content
    if output_format in ("json", "both"):
        response_data["analysis"] = analysis

    return jsonify(response_data), 200


@app.route("/api/health", methods=["GET"])
def health_check() -> Response:
    """Health check endpoint."""
    return jsonify({"status": "healthy", "version": __version__})


@app.route("/api/generate", methods=["POST"])
def generate_readme() -> tuple[Response, int]:
    """
    Generate a README from an uploaded zip file or GitHub URL.

    Request can be:
        - multipart/form-data with 'file' field containing a zip
        - JSON with 'github_url' field

    Optional parameters (query string, form or JSON):
        - include_badges: bool (default: false)
        - probe: bool (default: false)
        - format: 'markdown' | 'json' | 'both' (default: 'both')

    Returns:
        JSON response with 'readme' and/or 'analysis'.
    """
    return _handle()


@app.route("/api/analysis", methods=["POST"])
def get_analysis() -> tuple[Response, int]:
    """Same inputs as /api/generate, but only returns the analysis."""
    return _handle(output_format="json")


@app.errorhandler(413)
def request_entity_too_large(error):
    """Handle file too large errors."""
    return jsonify({"error": "File too large. Maximum size is 20MB."}), 413


def create_app() -> Flask:
    """Return the configured Flask application."""
    return app


def main() -> None:
    """Run the development server."""
    print("Starting claw-readme API server...")
    print()
    print("API Endpoints:")
    print("  POST /api/generate - Generate README from zip or GitHub URL")
    print("  POST /api/analysis - Get the analysis only")
    print("  GET  /api/health   - Health check")
    print()
    app.run(host="127.0.0.1", port=5001)


if __name__ == "__main__":
    main()
