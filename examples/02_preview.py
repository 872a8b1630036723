"""
Document and video previews
"""
import asyncio
import os

from alidrive import AliDriveClient


async def main():
    async with AliDriveClient(os.environ["ALIDRIVE_ACCESS_TOKEN"]) as drive:
        doc = await drive.get_office_preview_url("doc-file-id")
        print(f"Preview URL: {doc.get('preview_url')}")

        video = await drive.get_video_preview_play_info("video-file-id")
        info = video.get("video_preview_play_info", {})
        for task in info.get("live_transcoding_task_list", []):
            print(f"{task.get('template_id')}: {task.get('url')}")


if __name__ == "__main__":
    asyncio.run(main())
