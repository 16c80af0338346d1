"""Setup file for uploading to https://pypi.org/ .

When a next release is to come, you need to do the following:
    - change version in this file
    - create a new release with a tag of the version in github
    - open a terminal in the folder where setup.py is and run from terminal:
    - if not installed : " pip install twine "
    - " python setup.py sdist "
    - " twine upload dist/* "

"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()


setup(
    name="daymod",
    version="0.1",
    description="Modelling and forecasting of days of activities from time use surveys",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license='GNU General Public License v3',
    keywords=[
        'time use', 'survey', 'ATUS', 'activity', 'markov chain',
        'forecasting', 'simulation', 'dataset'
    ],
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.19",
        "pandas>=1.2",
        "openpyxl>=2.6",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
  ],
)
