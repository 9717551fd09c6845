from setuptools import setup, find_packages
import kscope


with open('readme.rst') as f:
    long_description = f.read()


setup(
    name='kscope',
    description="A front end for a tiny expression language, lowering to ppci ir-code",
    long_description=long_description,
    version=kscope.__version__,
    author='kscope developers',
    include_package_data=True,
    packages=find_packages(exclude=["*.test.*", "test"]),
    install_requires=['ppci'],
    extras_require={
        'test': ['pytest', 'hypothesis', 'lark'],
    },
    entry_points={
        'console_scripts': [
            'kscope = kscope.cli.kscope:kscope',
        ]
    },
    license='BSD',
    classifiers=[
        'License :: OSI Approved :: BSD License',
        'Development Status :: 3 - Alpha',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Software Development :: Compilers',
    ]
)
