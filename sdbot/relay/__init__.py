"""File relay package.

Module split:
    - `uploader`: publishes generated images to the relay host.
    - `downloader`: streams a remote file to local disk.
"""
