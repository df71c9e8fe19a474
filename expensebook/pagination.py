WINDOW = 5


def to_page(page):
    """Page number from a query-string value; anything unusable is page 1."""
    try:
        return max(1, int(page))
    except (TypeError, ValueError):
        return 1


def clamp_page(page, pages):
    return min(to_page(page), max(pages, 1))


def page_links(page, pages, window=WINDOW):
    """Page numbers to render around ``page``; ``None`` marks an ellipsis.

    Up to ``window`` consecutive pages are shown centred on the current page,
    shifted at the edges so the window stays full, plus the first and last
    page when they fall outside it.
    """
    if pages <= window:
        return list(range(1, pages + 1))

    half = window // 2
    start = max(1, page - half)
    end = min(pages, start + window - 1)
    start = max(1, end - window + 1)

    links = []
    if start > 1:
        links.append(1)
        if start > 2:
            links.append(None)
    links.extend(range(start, end + 1))
    if end < pages:
        if end < pages - 1:
            links.append(None)
        links.append(pages)
    return links
