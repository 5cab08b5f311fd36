from setuptools import setup, find_packages

setup(
    name = 'logille',
    version = '0.1.0',
    author = 'Uwe Jugel',
    description = ('Logo turtle scripts drawn in the terminal with unicode braille characters'),
    license = 'AGPLv3+',
    keywords = "terminal braille drawing logo turtle interpreter repl",
    scripts = [],
    packages = find_packages(
        exclude = ['contrib', 'docs', 'tests'],
    ),
    python_requires = '>=3.7',
    install_requires = [
        'lark>=1.1.0',
        'pygments>=2.0.0',
        'prompt-toolkit>=3.0.0',
    ],
    extras_require = {
        'test': ['pytest'],
    },
    entry_points={
        "console_scripts": [
            "logille=logille:main",
        ]
    },
    classifiers = [
        "Development Status :: 4 - Beta",
        "Topic :: Utilities",
        'Environment :: Console',
        'License :: OSI Approved :: GNU Affero General Public License v3',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Interpreters',
    ],
)
