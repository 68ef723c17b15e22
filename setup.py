"""
Setup script for the vector-kmeans package
"""

# Always prefer setuptools over distutils
from setuptools import setup, find_packages
# To use a consistent encoding
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the relevant file
with open(path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()
    long_description_content_type = 'text/markdown'

# Get the code version
version = {}
with open(path.join(here, "vector/version.py")) as fp:
    exec(fp.read(), version)
__version__ = version['__version__']
# now we have a `__version__` variable

setup(
    name='vector-kmeans',
    version=__version__,
    description='Fixed-dimension vector arithmetic and k-means clustering',
    long_description=long_description,
    long_description_content_type=long_description_content_type,
    license='MIT',
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'Topic :: Scientific/Engineering :: Information Analysis',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
    keywords='vector k-means clustering pagination',
    packages=find_packages(include=['vector*', 'kmeans*', 'pagination*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.11',
        'scikit-learn>=0.24',  # check_random_state, silhouette_score, make_blobs
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
