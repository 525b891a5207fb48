from setuptools import setup, find_packages

setup(
    name='spotify-dj-export',
    version='0.1.0',
    description='Export Spotify playlist tempo, key, energy, ISRC and genres to CSV for DJ software',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    author='',
    author_email='',
    license='MIT',
    platforms='ALL',
    packages=find_packages(include=['djexport', 'djexport.*']),
    python_requires='>=3.10',
    install_requires=[
        'spotipy',
        'pydantic>=2.0.0',
        'pydantic-settings',
        'PyYAML',
        'typer',
        'rich',
        'cachetools',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'djexport=djexport.cli:main',
        ],
    },
)
