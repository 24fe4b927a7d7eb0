# topmark:header:start
#
#   project      : LeafPress
#   file         : __init__.py
#   file_relpath : src/leafpress/components/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering components and the page renderer."""
