# topmark:header:start
#
#   project      : LeafPress
#   file         : __init__.py
#   file_relpath : src/leafpress/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LeafPress package.

LeafPress is a build-time content pipeline for Markdown notes. It loads a tree
of documents, enriches them through an ordered list of transform stages
(front matter, dates, transclusion), and emits rendered HTML pages, including a
derived timeline of note activity.
"""

from __future__ import annotations
