import argparse
import asyncio
import sys
from pathlib import Path

from resume_review.analysis.controller import build_controller
from resume_review.analysis.models import Submission
from resume_review.analysis.navigation import RecordingNavigator
from resume_review.analysis.pipeline import Completed
from resume_review.analysis.review import ReviewLoader, ReviewState
from resume_review.analysis.stages import PipelineState, StatusChannel
from resume_review.auth.static_authenticator import StaticAuthenticator
from resume_review.config.settings import Settings
from resume_review.database.connection import close_pool
from resume_review.feedback.models import CATEGORY_KEYS, Feedback
from resume_review.inference.factory import InferenceClientFactory
from resume_review.logging.logger import Log
from resume_review.raster.loader import get_engine_loader
from resume_review.raster.models import DocumentFile
from resume_review.raster.rasterizer import build_rasterizer
from resume_review.storage.factory import KeyValueStoreFactory
from resume_review.storage.local_blob_store import LocalBlobStore
from resume_review.storage.record_store import RecordStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-review",
        description="Upload a résumé, get it evaluated and review the stored feedback.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="run the analysis pipeline on a PDF")
    analyze.add_argument("file", type=Path)
    analyze.add_argument("--company", default="", help="company name")
    analyze.add_argument("--title", default="", help="job title")
    analyze.add_argument("--description", default="", help="job description")

    review = commands.add_parser("review", help="show a stored analysis")
    review.add_argument("id")
    return parser


def print_status(state: PipelineState) -> None:
    if state.status_text:
        print(state.status_text)


def format_feedback(feedback: Feedback) -> str:
    lines = [f"Overall score: {feedback.overall_score:g}"]
    for attr, key in CATEGORY_KEYS.items():
        category = getattr(feedback, attr)
        lines.append(f"  {key}: {category.score:g}")
        lines.extend(f"    [{tip.type}] {tip.tip}" for tip in category.tips)
    return "\n".join(lines)


def format_review(state: ReviewState) -> str:
    if state.redirect:
        return f"Login required: {state.redirect}"
    if state.record is None:
        return state.error or f"Resume {state.record_id} not found"
    record = state.record
    lines = [
        f"Resume {record.id}: {record.job_title} at {record.company_name}",
        f"  resume: {record.resume_path} ({len(state.resume_bytes or b'')} bytes)",
        f"  image:  {record.image_path} ({len(state.image_bytes or b'')} bytes)",
    ]
    if state.feedback is None:
        lines.append("Waiting for analysis results...")
    else:
        lines.append(format_feedback(state.feedback))
    return "\n".join(lines)


async def run_command(settings: Settings, args: argparse.Namespace) -> int:
    blob_store = LocalBlobStore(settings.files_root)
    kv = await asyncio.to_thread(KeyValueStoreFactory.create, settings)
    record_store = RecordStore(kv)

    if args.command == "review":
        loader = ReviewLoader(
            StaticAuthenticator(settings.authenticated),
            record_store,
            blob_store,
            settle_seconds=settings.review_settle_seconds,
        )
        state = await loader.load(args.id)
        print(format_review(state))
        return 0 if state.record is not None else 1

    engine_loader = get_engine_loader(settings)
    controller = build_controller(
        settings,
        blob_store=blob_store,
        record_store=record_store,
        inference=InferenceClientFactory.create(
            settings, blob_store=blob_store, engine_loader=engine_loader
        ),
        rasterizer=build_rasterizer(settings, engine_loader),
        navigator=RecordingNavigator(),
        status=StatusChannel([print_status]),
    )
    submission = Submission(
        file=DocumentFile.from_path(args.file),
        company_name=args.company,
        job_title=args.title,
        job_description=args.description,
    )
    outcome = await controller.submit(submission)
    if not isinstance(outcome, Completed):
        return 1
    print(outcome.review_path)
    if outcome.record.feedback is not None:
        print(format_feedback(outcome.record.feedback))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse arguments -> build dependencies -> run one command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        return asyncio.run(run_command(settings, args))
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
