# runtpl/core/__init__.py
"""
Core of runtpl: the templating engine, builtin functions, and the context,
template store and interactive helpers around it.
"""
