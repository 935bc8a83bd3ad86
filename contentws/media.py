# Uploaded media
#
# Files posted in the "screenshots" multipart field are saved in the upload folder under
# a unique name. The content "media" field holds the urls of the saved files:
#   {"1": "uploads/3f2a...c1.png", "2": "uploads/77b0...9e.jpg"}
#
import json
import os
import uuid
from typing import Iterable
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename
import contentws
from .config import get_config


class MediaStorage:
    """
    Save uploaded files to a folder

    :param folder: destination folder, defaults to the UPLOAD_FOLDER configuration
    :param url_prefix: prefix of the returned urls, defaults to the UPLOAD_URL configuration
    """

    def __init__(self, folder: str = None, url_prefix: str = None) -> None:
        self.folder = folder
        self.url_prefix = url_prefix

    def get_folder(self) -> str:
        return self.folder if self.folder is not None else get_config("UPLOAD_FOLDER")

    def get_url_prefix(self) -> str:
        return self.url_prefix if self.url_prefix is not None else get_config("UPLOAD_URL")

    @staticmethod
    def unique_name(filename: str) -> str:
        """
        :param filename: name of the uploaded file, eg. "screen shot.PNG"
        :return: random name with the same extension, eg. "3f2a...c1.PNG"
        """
        _, ext = os.path.splitext(secure_filename(filename or ""))
        return uuid.uuid4().hex + ext

    def save(self, files: Iterable[FileStorage]) -> str:
        """
        :param files: uploaded files
        :return: json object mapping "1", "2", ... to the urls of the saved files
        :raise OSError: a file couldn't be written, the files saved before it are removed
        """
        folder = self.get_folder()
        os.makedirs(folder, exist_ok=True)

        media_map = {}
        saved = []
        try:
            for count, upload in enumerate(files, start=1):
                name = self.unique_name(upload.filename)
                while os.path.exists(os.path.join(folder, name)):
                    name = self.unique_name(upload.filename)
                path = os.path.join(folder, name)
                upload.save(path)
                saved.append(path)
                contentws.log.debug(f"Saved {upload.filename} as {name}")
                media_map[str(count)] = self.get_url_prefix() + name
        except OSError:
            self.remove_files(saved)
            raise

        return json.dumps(media_map)

    def delete(self, media: str) -> None:
        """
        Remove the files of a media map returned by save

        :param media: json object mapping "1", "2", ... to media urls
        """
        url_prefix = self.get_url_prefix()
        names = [url[len(url_prefix) :] if url.startswith(url_prefix) else os.path.basename(url) for url in json.loads(media).values()]
        self.remove_files([os.path.join(self.get_folder(), name) for name in names])

    @staticmethod
    def remove_files(paths: Iterable[str]) -> None:
        for path in paths:
            try:
                os.remove(path)
            except OSError as exc:
                # the request already failed, report the leftover file and keep the original error
                contentws.log.warning(f"Failed to remove {path}: {exc}")
            else:
                contentws.log.debug(f"Removed {path}")
