from setuptools import setup
import os

def read_requirements():
    """Reads requirements.txt, dropping blank lines and comments."""
    reqs_file = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    requirements = []
    with open(reqs_file, 'r', encoding='utf-8') as f:
        for line in f:
            # Drop inline comments, then surrounding whitespace
            line = line.split('#', 1)[0].strip()
            if line:
                requirements.append(line)
    return requirements

# Metadata (name, version, extras) lives in pyproject.toml.
# dependencies is declared dynamic there, so setuptools takes it from here.
setup(
    install_requires=read_requirements(),
)
