"""Browser front end for the page replacement simulator.

This package provides a Flask application that exposes the simulator
through a web form.  It is an **optional** extra — install with::

    pip install page-sim[web]

The ``create_app`` factory in ``app.py`` builds a ``Simulator`` and
serves four endpoints:

- ``GET /`` — HTML form page with the default reference string.
- ``POST /api/generate`` — a random reference string.
- ``POST /api/simulate`` — fault count for one policy.
- ``POST /api/compare`` — fault counts for every policy.
"""
