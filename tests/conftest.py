import os

os.environ["NO_COLOR"] = "1"  # termcolor output is compared as plain text
