from setuptools import setup, find_packages

setup(
    name='limacon_templates',
    version='0.1.0',
    author='Maverick S. H. Oh',
    author_email='maverick.sh.oh@gmail.com',
    description='Parametric limacon and Fourier ring brightness templates for black-hole shadow imaging.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'jax',
        'numba',
        'numpy',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
    ],
    python_requires='>=3.8',
)
