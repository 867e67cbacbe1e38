from setuptools import setup

setup(
    name        = "xnbt",
    version     = "1.0.0",
    author      = "theJ89",
    description = "NBT and SNBT codec with extensible tag types",
    packages    = [ "xnbt" ],
    zip_safe    = True
)
