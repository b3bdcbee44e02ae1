"""State machine for the admin add, edit and upload dialogs."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace

from lyrics_bot.domain.catalog import CatalogEntry, Category, EditableField
from lyrics_bot.domain.events import (
    DirectUrl,
    FreeText,
    ImageInput,
    PhotoAttachment,
    RawMedia,
)
from lyrics_bot.domain.replies import Reply
from lyrics_bot.domain.sessions import Session, Stage
from lyrics_bot.keyboards import (
    category_keyboard,
    edit_field_keyboard,
    main_menu_keyboard,
    remove_keyboard,
)
from lyrics_bot.services.authorization import AuthorizationGate
from lyrics_bot.services.catalog import CatalogService
from lyrics_bot.services.failures import failure_text
from lyrics_bot.services.media import MediaIngestionError, MediaIngestionService
from lyrics_bot.services.session_store import SessionStore

logger = logging.getLogger(__name__)

DialogInput = FreeText | PhotoAttachment
_StageHandler = Callable[[Session, DialogInput], Awaitable[list[Reply]]]

_FIELD_PROMPTS = {
    EditableField.TITLE: "Please enter the new title:",
    EditableField.LYRICS: "Please enter the new lyrics:",
    EditableField.CATEGORY: "Please select the new category:",
    EditableField.IMAGE: "Please send the new image or an image URL:",
}


@dataclass
class DialogService:
    """Drives a privileged user's dialog one event at a time.

    Each handler receives the current session and returns the replies to
    send. Handlers store the next session wholesale or delete it; an event
    that doesn't fit the stage leaves the session unchanged and reprompts.
    """

    session_store: SessionStore
    catalog_service: CatalogService
    media_service: MediaIngestionService
    authorization: AuthorizationGate
    environment: str = "production"

    def __post_init__(self) -> None:
        self._handlers: dict[Stage, _StageHandler] = {
            Stage.AWAITING_TITLE: self._on_title,
            Stage.AWAITING_CATEGORY: self._on_category,
            Stage.AWAITING_LYRICS: self._on_lyrics,
            Stage.AWAITING_IMAGE: self._on_image,
            Stage.EDIT_SELECT_SONG: self._on_edit_song,
            Stage.EDIT_SELECT_FIELD: self._on_edit_field,
            Stage.EDIT_ENTER_VALUE: self._on_edit_value,
            Stage.AWAITING_UPLOAD: self._on_upload,
        }

    async def start_add(self, user_id: int) -> list[Reply]:
        """Begin the add-song dialog."""
        return await self._start(
            user_id,
            Stage.AWAITING_TITLE,
            denial="You are not authorized to add songs.",
            prompt=Reply(
                text="Please enter the song title:\n(or type /cancel to abort)",
                reply_markup=remove_keyboard(),
            ),
        )

    async def start_edit(self, user_id: int) -> list[Reply]:
        """Begin the edit-song dialog."""
        return await self._start(
            user_id,
            Stage.EDIT_SELECT_SONG,
            denial="You are not authorized to edit songs.",
            prompt=Reply(
                text="Please enter the title of the song you want to edit:",
                reply_markup=remove_keyboard(),
            ),
        )

    async def start_upload(self, user_id: int) -> list[Reply]:
        """Begin a standalone image upload."""
        return await self._start(
            user_id,
            Stage.AWAITING_UPLOAD,
            denial="You are not authorized to upload images.",
            prompt=Reply(text="Please send me the image you want to upload."),
        )

    async def cancel(self, user_id: int) -> list[Reply]:
        """Drop the user's dialog, whatever stage it is in."""
        async with self.session_store.lock(user_id):
            existed = self.session_store.get(user_id) is not None
            self.session_store.delete(user_id)
        if not existed:
            return [Reply(text="There is nothing to cancel.")]
        logger.info("Dialog cancelled", extra={"user_id": user_id})
        return [Reply(text="Operation cancelled.", reply_markup=main_menu_keyboard())]

    async def handle_input(
        self, user_id: int, event: DialogInput
    ) -> list[Reply] | None:
        """Advance the user's dialog, or return None when there isn't one.

        Privilege is checked on every event, so a user removed from the admin
        list mid-dialog falls back to browsing and the session is left to
        expire.
        """
        if not self.authorization.is_privileged(user_id):
            return None
        async with self.session_store.lock(user_id):
            session = self.session_store.get(user_id)
            if session is None:
                return None
            self.session_store.touch(user_id)
            return await self._handlers[session.stage](session, event)

    async def _start(
        self, user_id: int, stage: Stage, denial: str, prompt: Reply
    ) -> list[Reply]:
        if not self.authorization.is_privileged(user_id):
            logger.info("Denied dialog start", extra={"user_id": user_id})
            return [Reply(text=denial)]
        async with self.session_store.lock(user_id):
            self.session_store.put(Session(owner=user_id, stage=stage))
        logger.info(
            "Dialog started", extra={"user_id": user_id, "stage": stage.value}
        )
        return [prompt]

    async def _on_title(self, session: Session, event: DialogInput) -> list[Reply]:
        title = event.text.strip() if isinstance(event, FreeText) else ""
        if not title:
            return [Reply(text="Please enter the song title as text:")]
        self.session_store.put(
            replace(session, stage=Stage.AWAITING_CATEGORY, title=title)
        )
        return [
            Reply(
                text="Please select the song category:",
                reply_markup=category_keyboard(),
            )
        ]

    async def _on_category(self, session: Session, event: DialogInput) -> list[Reply]:
        category = (
            Category.from_label(event.text) if isinstance(event, FreeText) else None
        )
        if category is None:
            return [
                Reply(
                    text="Please select a valid category (Choir/Non-Choir):",
                    reply_markup=category_keyboard(),
                )
            ]
        self.session_store.put(
            replace(session, stage=Stage.AWAITING_LYRICS, category=category.value)
        )
        return [
            Reply(
                text="Great! Now please enter the lyrics:",
                reply_markup=remove_keyboard(),
            )
        ]

    async def _on_lyrics(self, session: Session, event: DialogInput) -> list[Reply]:
        if not isinstance(event, FreeText):
            return [Reply(text="Please enter the lyrics as text:")]
        self.session_store.put(
            replace(session, stage=Stage.AWAITING_IMAGE, lyrics=event.text)
        )
        return [
            Reply(text="Perfect! Now please send the image URL or upload an image:")
        ]

    async def _on_image(self, session: Session, event: DialogInput) -> list[Reply]:
        try:
            image_url = await self._resolve_image(_image_input(event))
        except MediaIngestionError as exc:
            return [self._media_failure(exc)]

        entry = CatalogEntry(
            title=session.title,
            lyrics=session.lyrics,
            category=Category.from_label(session.category),
            image_url=image_url,
        )
        try:
            self.catalog_service.add(entry)
        except Exception as exc:
            logger.exception("Failed to add song", extra={"title": entry.title})
            reply = Reply(
                text=failure_text("Failed to add song.", exc, self.environment),
                reply_markup=main_menu_keyboard(),
            )
        else:
            logger.info("Song added", extra={"title": entry.title})
            reply = Reply(
                text="Song added successfully!", reply_markup=main_menu_keyboard()
            )
        self.session_store.delete(session.owner)
        return [reply]

    async def _on_edit_song(self, session: Session, event: DialogInput) -> list[Reply]:
        if not isinstance(event, FreeText):
            return [Reply(text="Please enter the song title as text:")]
        try:
            entry = self.catalog_service.find(event.text)
        except Exception as exc:
            logger.exception("Failed to look up song", extra={"title": event.text})
            return [
                Reply(
                    text=failure_text(
                        "Failed to look up the song. Please try again:",
                        exc,
                        self.environment,
                    )
                )
            ]
        if entry is None:
            return [
                Reply(
                    text=(
                        "Song not found. Please enter the exact title "
                        "of an existing song:"
                    )
                )
            ]
        self.session_store.put(
            replace(session, stage=Stage.EDIT_SELECT_FIELD, title=entry.title)
        )
        return [
            Reply(
                text=f"Editing {entry.title}. Which field do you want to change?",
                reply_markup=edit_field_keyboard(),
            )
        ]

    async def _on_edit_field(self, session: Session, event: DialogInput) -> list[Reply]:
        field = (
            EditableField.from_button_label(event.text)
            if isinstance(event, FreeText)
            else None
        )
        if field is None:
            return [
                Reply(
                    text="Please choose one of the fields below:",
                    reply_markup=edit_field_keyboard(),
                )
            ]
        self.session_store.put(
            replace(session, stage=Stage.EDIT_ENTER_VALUE, edit_field=field)
        )
        if field is EditableField.CATEGORY:
            markup = category_keyboard()
        else:
            markup = remove_keyboard()
        return [Reply(text=_FIELD_PROMPTS[field], reply_markup=markup)]

    async def _on_edit_value(self, session: Session, event: DialogInput) -> list[Reply]:
        field = session.edit_field
        if field is None:
            self.session_store.put(
                replace(session, stage=Stage.EDIT_SELECT_FIELD, edit_field=None)
            )
            return [
                Reply(
                    text="Please choose one of the fields below:",
                    reply_markup=edit_field_keyboard(),
                )
            ]

        if field is EditableField.IMAGE:
            try:
                value = await self._resolve_image(_image_input(event))
            except MediaIngestionError as exc:
                return [self._media_failure(exc)]
        elif not isinstance(event, FreeText):
            return [Reply(text=f"Please enter the new {field.value} as text:")]
        elif (
            field is EditableField.CATEGORY and Category.from_label(event.text) is None
        ):
            return [
                Reply(
                    text="Please select a valid category (Choir/Non-Choir):",
                    reply_markup=category_keyboard(),
                )
            ]
        elif field is EditableField.TITLE:
            value = event.text.strip()
            if not value:
                return [Reply(text="Please enter the new title as text:")]
        else:
            value = event.text

        try:
            self.catalog_service.update_field(session.title, field, value)
        except Exception as exc:
            logger.exception(
                "Failed to update song",
                extra={"title": session.title, "field": field.value},
            )
            reply = Reply(
                text=failure_text("Failed to update song.", exc, self.environment),
                reply_markup=main_menu_keyboard(),
            )
        else:
            logger.info(
                "Song updated", extra={"title": session.title, "field": field.value}
            )
            reply = Reply(
                text="Song updated successfully!", reply_markup=main_menu_keyboard()
            )
        self.session_store.delete(session.owner)
        return [reply]

    async def _on_upload(self, session: Session, event: DialogInput) -> list[Reply]:
        if not isinstance(event, PhotoAttachment):
            return [Reply(text="Please send an image to upload (or /cancel to abort).")]
        try:
            url = await self.media_service.rehost(event.file_id)
        except MediaIngestionError as exc:
            return [self._media_failure(exc, hint="Please send the image again.")]
        self.session_store.delete(session.owner)
        return [
            Reply(
                text=f"Image uploaded successfully: {url}",
                reply_markup=main_menu_keyboard(),
            )
        ]

    async def _resolve_image(self, image: ImageInput) -> str:
        if isinstance(image, RawMedia):
            return await self.media_service.rehost(image.file_id)
        return image.url

    def _media_failure(
        self,
        exc: MediaIngestionError,
        hint: str = "Please send the image again or an image URL.",
    ) -> Reply:
        return Reply(
            text=failure_text(
                f"{exc.user_message} {hint}",
                exc,
                self.environment,
            )
        )


def _image_input(event: DialogInput) -> ImageInput:
    """Photos still need rehosting; text is taken verbatim as the URL."""
    if isinstance(event, PhotoAttachment):
        return RawMedia(file_id=event.file_id)
    return DirectUrl(url=event.text.strip())
