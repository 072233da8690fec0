"""
Generators — produce source files from discovered project content.

Each generator module exposes a ``generate()`` function that writes its
output and returns the ``GeneratedFile`` it produced.
"""
