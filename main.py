"""Pigment-match game server (Flask).

The player smears virtual oil pigments on a palette and mixes them to hit a
randomly chosen target colour.  Mixing happens in OKLab with a darkening
term per extra pigment; the result is scored with a ΔE-style distance in
CIE Lab (100 = perfect match).

Usage
-----
$ pip install -e .
$ python main.py                      # starts on http://127.0.0.1:5000

Configuration comes from ``PIGMENT_MATCH_*`` environment variables, e.g.
``PIGMENT_MATCH_CATALOG=expanded`` or ``PIGMENT_MATCH_STATS_PATH=stats.json``.
"""

from __future__ import annotations

from pigment_match.app import create_app

app = create_app()

if __name__ == "__main__":
    # one shared session per process; keep requests serial
    app.run(debug=False, threaded=False)
