"""
Upload files to AliDrive
"""
import asyncio
import os

from alidrive import AliDriveClient, UploadConfig, setup_logging


async def main():
    setup_logging()
    token = os.environ["ALIDRIVE_ACCESS_TOKEN"]

    async with AliDriveClient(token) as drive:

        # Simple upload to root (tries rapid upload first)
        result = await drive.upload("document.pdf")
        print(f"Uploaded: {result.file_id} (rapid={result.rapid_upload})")

        # Upload with custom name into a folder
        result = await drive.upload("photo.jpg", parent_id="folder-id", name="vacation_2024.jpg")
        print(f"Uploaded as: {result.name}")

        # Upload with progress callback
        def on_progress(percent):
            print(f"Progress: {percent}%")

        result = await drive.upload("large_file.zip", progress_callback=on_progress)
        print(f"Uploaded {result.parts_uploaded} parts")

        # Skip the pre-hash round-trip for this call
        result = await drive.upload("notes.txt", rapid_upload=False)
        print(f"Uploaded: {result.file_id}")

        # Upload bytes already in memory
        result = await drive.upload(b"hello alidrive", name="hello.txt")
        print(f"Uploaded: {result.file_id}")

    # Keep temp files on a specific disk
    config = UploadConfig(temp_dir="/var/tmp/alidrive")
    async with AliDriveClient(token, upload_config=config) as drive:
        result = await drive.upload("backup.tar")
        print(f"Uploaded: {result.file_id}")


if __name__ == "__main__":
    asyncio.run(main())
