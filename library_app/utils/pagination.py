from flask import current_app, request


def page_args():
    """Read ``page`` / ``per_page`` from the query string, clamped to sane bounds."""
    default = current_app.config["DEFAULT_PER_PAGE"]
    maximum = current_app.config["MAX_PER_PAGE"]

    page = request.args.get("page", 1, type=int) or 1
    per_page = request.args.get("per_page", default, type=int) or default

    return max(page, 1), min(max(per_page, 1), maximum)


def paginate(query, serialize):
    page, per_page = page_args()
    result = query.paginate(page=page, per_page=per_page, error_out=False)

    first = (result.page - 1) * result.per_page + 1 if result.items else None
    last = first + len(result.items) - 1 if result.items else None

    return {
        "data": [serialize(x) for x in result.items],
        "current_page": result.page,
        "last_page": max(result.pages, 1),
        "per_page": result.per_page,
        "total": result.total,
        "from": first,
        "to": last,
    }
