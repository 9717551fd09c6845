""" Command line interface of kscope. """
