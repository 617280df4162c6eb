#!/usr/bin/env python

from setuptools import find_packages, setup

setup(
    name='hackportal',
    version='1.0.0',
    description='Registration and project submission portal for student hackathons',
    packages=find_packages(include=['hackportal', 'hackportal.*']),
    include_package_data=True,
    package_data={'hackportal': ['templates/*.html', 'templates/*/*.html']},
    python_requires='>=3.10',
    install_requires=[
        'Django>=4.2',
        'django-bootstrap4>=23.1',
        'haikunator>=2.1',
        'psycopg2-binary>=2.9',
        'sentry-sdk>=1.40',
    ],
    extras_require={
        'test': [
            'pytest>=7.4',
            'pytest-django>=4.5',
        ],
    },
    license='MIT License'
)
