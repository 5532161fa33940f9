from setuptools import setup

setup(
    name        = "jsnbt",
    version     = "1.0.0",
    author      = "theJ89",
    description = "theJ89's SNBT Library",
    packages    = [ "jsnbt" ],
    zip_safe    = True,
    test_suite  = "test"
)
