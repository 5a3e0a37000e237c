from flask import Blueprint, abort, render_template, request
from app.projects.registry import (
    get_all_categories,
    get_calculators_by_category,
    get_category_by_id,
    get_featured_calculators,
    search_calculators,
)

main_bp = Blueprint('main', __name__)

@main_bp.route('/')
def index():
    # Search box and category tabs both filter the same catalogue
    term = request.args.get('q', '').strip()
    category_id = request.args.get('category', 'all')
    calculators = search_calculators(term, category_id)

    return render_template(
        'index.html',
        calculators=calculators,
        featured=get_featured_calculators(),
        categories=get_all_categories(),
        term=term,
        active_category=category_id,
    )

@main_bp.route('/category/<category_id>')
def category(category_id):
    category = get_category_by_id(category_id)
    if not category:
        abort(404)

    calculators = get_calculators_by_category(category_id)

    return render_template('category.html', category=category, calculators=calculators)

@main_bp.app_errorhandler(404)
def page_not_found(e):
    return render_template('404.html'), 404
