"""Core text transforms and the content tree.

WHY: The pieces here carry no I/O. capitalizer.py and palette.py back the
format endpoint; document.py is the tree the client view edits.

RULES:
- Nothing in core imports from server or client
"""
