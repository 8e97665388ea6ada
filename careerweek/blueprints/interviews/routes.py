from datetime import timedelta
from io import BytesIO

from flask import abort, current_app, render_template, request, redirect, send_file, url_for, flash
from flask_login import login_required, current_user
from . import bp
from .forms import InterviewForm
from ..candidates.forms import DeleteForm
from ...extensions import db
from ...models.candidate import Candidate
from ...models.interview import Interview, RoundType
from ...services.ics import build_ics
from ...services.rounds import preview_status, save_round
from ...services.scoring import ScoringError, breakdown_total, categories_for, normalize_breakdown

ROUND_TYPES = {rt.value for rt in RoundType}


def _owned_candidate(candidate_id):
    return Candidate.query.filter_by(id=candidate_id, user_id=current_user.id).first_or_404()


def _owned_interview(interview_id):
    return (
        Interview.query
        .join(Candidate, Candidate.id == Interview.candidate_id)
        .filter(Interview.id == interview_id, Candidate.user_id == current_user.id)
        .first_or_404()
    )


def _collect(form, round_type):
    """Turn the form into the values stored on an interview row.

    Ratings are clamped into 0-10 and the score derived from them; hr rounds
    keep the manually entered score.
    """
    keys = categories_for(round_type)
    details = normalize_breakdown(round_type, form.rating_values(keys)) if keys else None
    if details is not None:
        score = breakdown_total(round_type, details)
    else:
        score = form.score.data
    return {
        "round_type": round_type,
        "score": score,
        "feedback": form.feedback.data,
        "details": details,
        "scheduled_at": form.scheduled_at.data,
    }


def _render(form, candidate, interview, round_type, fixed_type, values=None):
    values = values or _collect(form, round_type)
    form.shown_type.data = round_type
    status = None
    if values["score"] is not None:
        status = preview_status(candidate, round_type, values["score"],
                                exclude_id=interview.id if interview is not None else None)
    return render_template(
        "interviews/form.html",
        form=form, c=candidate, interview=interview,
        round_type=round_type, fixed_type=fixed_type,
        rating_fields=form.ratings(categories_for(round_type)),
        total=values["score"], resulting_status=status or candidate.status,
    )


def _handle(form, candidate, interview, round_type, fixed_type):
    if not form.validate_on_submit():
        return _render(form, candidate, interview, round_type, fixed_type)
    try:
        values = _collect(form, round_type)
    except ScoringError as e:
        flash(str(e), "danger")
        return _render(form, candidate, interview, round_type, fixed_type)

    if form.preview.data:
        return _render(form, candidate, interview, round_type, fixed_type, values)
    if values["score"] is None:
        form.score.errors = list(form.score.errors) + ["Enter a score for this round."]
        return _render(form, candidate, interview, round_type, fixed_type, values)

    try:
        save_round(candidate, interview, values)
    except Exception:
        db.session.rollback()
        current_app.logger.exception('Error saving interview for candidate %s', candidate.id)
        flash("Failed to save interview", "danger")
        return _render(form, candidate, interview, round_type, fixed_type, values), 500
    flash("Interview saved", "success")
    return redirect(url_for("candidates.detail", candidate_id=candidate.id))


@bp.route("/new", methods=["GET", "POST"])
@login_required
def create_interview():
    candidate_id = request.args.get("candidate_id", type=int)
    if candidate_id is None:
        abort(404)
    c = _owned_candidate(candidate_id)

    fixed_type = request.args.get("round_type")
    if fixed_type is not None and fixed_type not in ROUND_TYPES:
        abort(400)

    form = InterviewForm()
    if fixed_type:
        form.round_type.data = fixed_type
    round_type = form.round_type.data or RoundType.TECHNICAL.value
    if round_type not in ROUND_TYPES:
        abort(400)

    if round_type == RoundType.DIRECTOR.value and any(i.round_type == round_type for i in c.interviews):
        flash("This candidate already has a director round. Edit it instead.", "warning")
        return redirect(url_for("candidates.detail", candidate_id=c.id))

    # the ratings on screen belong to the type the form was last shown with
    shown_type = form.shown_type.data
    if form.is_submitted() and not fixed_type and not form.preview.data and shown_type and shown_type != round_type:
        flash("Round type changed. Rate this round, then save.", "info")
        return _render(form, c, None, round_type, fixed_type)

    return _handle(form, c, None, round_type, fixed_type)


@bp.route("/<int:interview_id>/edit", methods=["GET", "POST"])
@login_required
def edit_interview(interview_id):
    i = _owned_interview(interview_id)
    c = i.candidate
    form = InterviewForm(obj=i)
    if request.method == "GET":
        for key, value in (i.details or {}).items():
            field = getattr(form, key, None)
            if field is not None and key in categories_for(i.round_type):
                field.data = value
    # the round type of an existing record never changes
    form.round_type.data = i.round_type
    return _handle(form, c, i, i.round_type, i.round_type)


@bp.post("/<int:interview_id>/delete")
@login_required
def delete_interview(interview_id):
    i = _owned_interview(interview_id)
    candidate_id = i.candidate_id
    form = DeleteForm()
    if not form.validate_on_submit():
        flash("Deletion was not confirmed", "warning")
        return redirect(url_for("candidates.detail", candidate_id=candidate_id))
    try:
        db.session.delete(i)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception('Error deleting interview %s', interview_id)
        flash("Failed to delete interview", "danger")
        return redirect(url_for("candidates.detail", candidate_id=candidate_id))
    current_app.logger.info('interview deleted id=%s candidate=%s', interview_id, candidate_id)
    flash("Interview deleted", "success")
    return redirect(url_for("candidates.detail", candidate_id=candidate_id))


@bp.get("/<int:interview_id>/ics")
@login_required
def download_ics(interview_id):
    i = _owned_interview(interview_id)
    if i.scheduled_at is None:
        abort(404)
    ics = build_ics(current_app.config['UID_DOMAIN'],
                    title=f"{i.round_label} interview: {i.candidate.name}",
                    start=i.scheduled_at,
                    end=(i.scheduled_at + timedelta(hours=1)),
                    description=i.candidate.email or "")
    return send_file(BytesIO(ics.encode('utf-8')), as_attachment=True,
                     download_name=f"interview_{i.id}.ics", mimetype="text/calendar")
