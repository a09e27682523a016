# keeps the repo root importable when running pytest without `pip install -e .`
