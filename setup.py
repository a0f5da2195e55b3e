from setuptools import find_packages, setup

package_name = 'pcd_loader'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
    ],
    install_requires=[
        'setuptools',
        'numpy',
        'PyYAML',
    ],
    zip_safe=True,
    maintainer='semesterproject',
    maintainer_email='semesterproject@todo.todo',
    description='Decoder for PCD point cloud files (ascii, binary, binary_compressed).',
    license='TODO: License declaration',
    python_requires='>=3.8',
    extras_require={
        'test': [
            'pytest',
            'python-lzf',
        ],
    },
    entry_points={
        'console_scripts': [
            'pcd_inspect = pcd_loader.cli:main',
        ],
    },
)
