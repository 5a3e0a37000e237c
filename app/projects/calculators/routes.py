"""
Calculators - every calculator in the registry is served by one view.
The view owns the form, runs the calculator's handler on Calculate, keeps the
last successful inputs in the session and clears them on Reset.
"""

import logging
from io import BytesIO

from flask import (
    Blueprint,
    abort,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    send_file,
    session,
    url_for,
)
from werkzeug.datastructures import MultiDict

from app.projects.calculators.handlers import CALCULATOR_HANDLERS
from app.projects.registry import get_calculator_by_id, get_category_by_id
from app.utils.logging import log_activity, log_project_visit
from app.utils.pdf_export import build_results_pdf, report_filename

logger = logging.getLogger(__name__)

calculators_bp = Blueprint('calculators', __name__,
                           template_folder='templates')

# Submitted keys that are not calculator inputs
CONTROL_FIELDS = ('csrf_token', 'action')

# Arithmetic failures a handler did not anticipate
CALCULATION_ERRORS = (ArithmeticError, ValueError)


def _session_key(calc_id):
    return f"calculator:{calc_id}"


def _get_calculator_or_404(category_id, calc_id):
    calculator = get_calculator_by_id(calc_id)
    if not calculator or calculator['category'] != category_id:
        abort(404)
    return calculator


def _submitted_inputs(overrides=None):
    """Form inputs as (key, value) pairs, safe to keep in the session."""
    overrides = overrides or {}
    inputs = [
        [key, value]
        for key, value in request.form.items(multi=True)
        if key not in CONTROL_FIELDS and key not in overrides
    ]
    inputs.extend([key, value] for key, value in overrides.items())
    return inputs


def _run_handler(handler_entry, form, calc_id):
    """Call the handler; unexpected arithmetic failures become an error message."""
    try:
        return handler_entry['handler'](form)
    except CALCULATION_ERRORS as e:
        logger.error(f"Calculation failed for {calc_id}: {e}")
        return None, "Error in calculation. Please check your inputs."


def _restore_last_result(handler_entry, calc_id):
    """
    Rebuild the form and result of the last successful calculation.

    Returns:
        tuple: (form, result), both None if nothing has been calculated yet
    """
    stored = session.get(_session_key(calc_id))
    if stored is None:
        return None, None
    form = handler_entry['form'](formdata=MultiDict(stored))
    result, err = _run_handler(handler_entry, form, calc_id)
    if err:
        # Stored inputs no longer pass validation (e.g. the rules changed)
        logger.warning(f"Discarding stored inputs for {calc_id}: {err}")
        session.pop(_session_key(calc_id), None)
        return None, None
    return form, result


def _iter_errors(errors):
    if isinstance(errors, dict):
        for value in errors.values():
            yield from _iter_errors(value)
    elif isinstance(errors, (list, tuple)):
        for value in errors:
            yield from _iter_errors(value)
    elif errors:
        yield errors


def _flash_form_errors(form):
    for field, errors in form.errors.items():
        for error in _iter_errors(errors):
            flash(f"{field}: {error}", "error")


def _render(calculator, handler_entry, form, result):
    return render_template(
        'calculators/calculator.html',
        calculator=calculator,
        category=get_category_by_id(calculator['category']),
        form=form,
        result=result,
        row_label=handler_entry.get('row_label', 'Entry'),
    )


@calculators_bp.route('/<category_id>/<calc_id>', methods=['GET', 'POST'])
def calculator(category_id, calc_id):
    """Display a calculator and handle Calculate / Reset / row actions."""
    calculator = _get_calculator_or_404(category_id, calc_id)
    handler_entry = CALCULATOR_HANDLERS.get(calc_id)

    if calculator['status'] != 'active' or not handler_entry:
        log_project_visit(calc_id, calculator['name'])
        return render_template('calculators/placeholder.html', calculator=calculator)

    calculator_url = url_for('calculators.calculator', category_id=category_id, calc_id=calc_id)

    if request.method == 'GET':
        log_project_visit(calc_id, calculator['name'])
        form, result = _restore_last_result(handler_entry, calc_id)
        return _render(calculator, handler_entry, form or handler_entry['form'](), result)

    action = request.form.get('action', 'calculate')

    if action == 'reset':
        session.pop(_session_key(calc_id), None)
        flash("Calculator has been reset", "info")
        return redirect(calculator_url)

    _, last_result = _restore_last_result(handler_entry, calc_id)
    form = handler_entry['form']()

    # Row actions may name a row, e.g. "remove_entry:2"
    action_name, _, argument = action.partition(':')
    extra_actions = handler_entry.get('actions', {})
    if action_name in extra_actions:
        err = extra_actions[action_name](form, *((argument,) if argument else ()))
        if err:
            flash(err, "error")
        return _render(calculator, handler_entry, form, last_result)

    if not form.validate_on_submit():
        _flash_form_errors(form)
        return _render(calculator, handler_entry, form, last_result)

    overrides = {}
    if 'prepare' in handler_entry:
        overrides = handler_entry['prepare'](form)

    result, err = _run_handler(handler_entry, form, calc_id)
    if err:
        flash(err, "error")
        return _render(calculator, handler_entry, form, last_result)

    session[_session_key(calc_id)] = _submitted_inputs(overrides)
    log_activity(calc_id, 'Calculate', f"Anonymous user calculated {calculator['name']}")
    flash(handler_entry['success'], "success")
    return _render(calculator, handler_entry, form, result)


@calculators_bp.route('/<category_id>/<calc_id>/export')
def export(category_id, calc_id):
    """Download the last results of a calculator as <slug>-results.pdf."""
    calculator = _get_calculator_or_404(category_id, calc_id)
    calculator_url = url_for('calculators.calculator', category_id=category_id, calc_id=calc_id)

    handler_entry = CALCULATOR_HANDLERS.get(calc_id)
    result = None
    if handler_entry:
        _, result = _restore_last_result(handler_entry, calc_id)
    if not result:
        flash("Could not find content to download", "error")
        return redirect(calculator_url)

    try:
        pdf_bytes = build_results_pdf(
            calculator['name'],
            result,
            page_size=current_app.config.get('PDF_PAGE_SIZE', 'A4'),
        )
    except Exception as e:
        logger.error(f"Error generating PDF for {calc_id}: {e}")
        flash("Failed to generate PDF. Please try again.", "error")
        return redirect(calculator_url)

    log_activity(calc_id, 'Export', f"Anonymous user exported {calculator['name']} results")
    return send_file(
        BytesIO(pdf_bytes),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=report_filename(calculator['name']),
    )
