""" Main entry point, runs the kscope command line. """

from .cli.kscope import kscope


if __name__ == '__main__':
    kscope()
