from flask import current_app, render_template, request, redirect, url_for, flash
from flask_login import login_required, current_user
from urllib.parse import urlencode
from . import bp
from .forms import CandidateForm, EditCandidateForm, DeleteForm
from ...extensions import db
from ...models.candidate import Candidate, CandidateStatus
from ...models.interview import Interview, RoundType
from ...services.pipeline import build_board
from ...services.rounds import schedule_first_round


def _owned_candidate(candidate_id):
    return Candidate.query.filter_by(id=candidate_id, user_id=current_user.id).first_or_404()


@bp.get("")
@login_required
def board():
    q = request.args.get("q", "")
    page = request.args.get("page", default=1, type=int)
    per_page = request.args.get("per_page", default=current_app.config["CANDIDATES_PER_PAGE"], type=int)

    try:
        columns, page, pages = build_board(current_user.id, q, page, per_page)
    except Exception:
        current_app.logger.exception('Error fetching candidates')
        db.session.rollback()
        flash("Failed to load candidates", "danger")
        columns, page, pages = [], 1, 1

    def make_page_url(target_page: int):
        params = request.args.to_dict()
        params['page'] = target_page
        return request.path + '?' + urlencode(params)

    return render_template("candidates/board.html", columns=columns, q=q,
                           page=page, pages=pages, make_page_url=make_page_url)


@bp.route("/create", methods=["GET", "POST"])
@login_required
def create_candidate():
    form = CandidateForm()
    if form.validate_on_submit():
        c = Candidate(
            user_id=current_user.id,
            name=form.name.data.strip(),
            email=form.email.data.strip(),
            phone=(form.phone.data or "").strip() or None,
            status=CandidateStatus.IN_PROGRESS.value,
        )
        try:
            db.session.add(c)
            db.session.commit()
        except Exception:
            db.session.rollback()
            current_app.logger.exception('Error adding candidate')
            flash("Failed to add candidate", "danger")
            return render_template("candidates/create.html", form=form), 500
        current_app.logger.info('candidate created id=%s', c.id)

        if form.interview_at.data:
            try:
                schedule_first_round(c, form.interview_at.data)
            except Exception:
                db.session.rollback()
                current_app.logger.exception('Error scheduling interview for candidate %s', c.id)
                flash("Candidate added, but the interview could not be scheduled. "
                      "Please reschedule manually.", "warning")
                return redirect(url_for("candidates.detail", candidate_id=c.id))

        flash("Candidate added", "success")
        return redirect(url_for("candidates.board"))
    return render_template("candidates/create.html", form=form)


@bp.get("/<int:candidate_id>")
@login_required
def detail(candidate_id):
    c = _owned_candidate(candidate_id)
    interviews = (
        Interview.query
        .filter_by(candidate_id=c.id)
        .order_by(Interview.created_at.asc(), Interview.id.asc())
        .all()
    )
    rounds = {rt.value: [i for i in interviews if i.round_type == rt.value] for rt in RoundType}
    return render_template("candidates/detail.html", c=c, rounds=rounds,
                           delete_form=DeleteForm(confirm="yes"))


@bp.route("/<int:candidate_id>/edit", methods=["GET", "POST"])
@login_required
def edit_candidate(candidate_id):
    c = _owned_candidate(candidate_id)
    form = EditCandidateForm(obj=c)
    if c.status == CandidateStatus.COMPLETED.value:
        form.status.choices = form.status.choices + [(c.status, CandidateStatus.COMPLETED.label.title())]

    if form.validate_on_submit():
        c.name = form.name.data.strip()
        c.email = form.email.data.strip()
        c.phone = (form.phone.data or "").strip() or None
        c.status = form.status.data
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            current_app.logger.exception('Error updating candidate %s', c.id)
            flash("Failed to update candidate", "danger")
            return render_template("candidates/edit.html", form=form, c=c), 500
        flash("Candidate updated", "success")
        return redirect(url_for("candidates.detail", candidate_id=c.id))
    return render_template("candidates/edit.html", form=form, c=c)


@bp.post("/<int:candidate_id>/delete")
@login_required
def delete_candidate(candidate_id):
    c = _owned_candidate(candidate_id)
    form = DeleteForm()
    if not form.validate_on_submit():
        flash("Deletion was not confirmed", "warning")
        return redirect(url_for("candidates.detail", candidate_id=c.id))
    try:
        # rounds go with it (relationship cascade)
        db.session.delete(c)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception('Error deleting candidate %s', candidate_id)
        flash("Failed to delete candidate", "danger")
        return redirect(url_for("candidates.detail", candidate_id=candidate_id))
    current_app.logger.info('candidate deleted id=%s', candidate_id)
    flash("Candidate deleted", "success")
    return redirect(url_for("candidates.board"))
