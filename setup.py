from setuptools import setup

setup(
    name='tinct',
    version='0.4.0',
    description='Styled text for terminals: colors, markup, wrapping and ANSI decoding',
    license='MIT',
    packages=['tinct'],
    package_data={'tinct': ['py.typed']},
    python_requires='>=3.10',
    install_requires=[
        'typing_extensions>=4.4',
    ],
    extras_require={
        'test': [
            'pytest>=7',
            'sybil>=6',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Environment :: Console',
        'Topic :: Terminals',
        'Typing :: Typed',
    ],
)
