""" A front end for a tiny expression language, lowering to ppci ir-code.

Example usage:

>>> from kscope.api import kscope_to_ir
>>> module = kscope_to_ir('def twice(x) x + x')
>>> [f.name for f in module.functions]
['twice']

"""

# Define version here. Used in docs, and setup script:
__version_info__ = (0, 1, 0)
__version__ = '.'.join(map(str, __version_info__))
