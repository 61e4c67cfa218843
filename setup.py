from setuptools import setup

setup(
    name='odesteppers',  # pluggable fixed-step ODE integrators
    version='0.1.0',
    description='Fixed-step ODE integrators (Euler, RK2, Heun, RK4, AB2) '
                'on numpy arrays and torch tensors',
    package_dir={'': 'src/python'},
    packages=['odesteppers'],
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'scipy',                                  # reference solutions
        'torch',                                  # tensor states
        'matplotlib',                             # plotting / --plot
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'odesteppers=odesteppers.cli:main',
        ],
    },
)
