"""View modules for manual routing.

All page implementations live under `views/` and expose a `view()` function.
Add any new page as a module with a `view()` callable and register it in
`PAGE_REGISTRY` inside `app.py`.
"""
