from parley.main import run

run()
