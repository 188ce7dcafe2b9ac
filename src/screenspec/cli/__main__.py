from screenspec.cli import app

app()
