from setuptools import setup, find_packages

from flaglinks import __version__


EXCLUDE_FROM_PACKAGES = ['main']

def readme():
    with open("README.rst") as f:
        return f.read()

setup(
    name='flaglinks',
    version=__version__,
    description='Flag and unflag links for Django models',
    long_description=readme(),
    long_description_content_type="text/x-rst",
    license='MIT',
    packages=find_packages(exclude=EXCLUDE_FROM_PACKAGES),
    package_data={
        'flaglinks': [
            'templates/flaglinks/*.html',
            'static/flaglinks/*.js',
        ],
    },
    include_package_data=True,
    python_requires='>=3.10',
    install_requires=[
        'Django>=4.2',
        'django-environ>=0.11.2',
        'djangorestframework>=3.15.0',
        'marshmallow>=3.13.0',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-django',
        ]
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Web Environment',
        'Framework :: Django',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
    ],
)
