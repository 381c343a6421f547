"""
CaseDesk Backend: Free-Text Sanitizer
=====================================

What:  Strips active markup from client-supplied text before it is stored.
How:   ``nh3.clean`` (Rust ammonia bindings) with its default allow-list:
       <script>/<style> elements are dropped together with their content,
       event-handler attributes and ``javascript:`` URLs are removed, and
       plain text plus basic formatting tags (b, i, p, ul, a href, ...)
       survive.
Who:   CaseService (description, resolution) and NoteService (content).

Properties:
    - Idempotent: sanitize(sanitize(x)) == sanitize(x)
    - Stateless: no state is kept between calls
    - None passes through, so optional fields stay NULL
"""

from typing import Optional

import nh3


def sanitize(raw: Optional[str]) -> Optional[str]:
    """
    Return ``raw`` with executable markup removed.

    Example:
        >>> sanitize("<script>alert(1)</script>hello")
        'hello'
        >>> sanitize('<b onclick="x()">bold</b>')
        '<b>bold</b>'
    """
    if raw is None:
        return None
    return nh3.clean(raw)
