from unittest.mock import MagicMock, patch

from rentledger.errors import InvalidMeterReading
from rentledger.models.room import Room, RoomStatus


class TestStageReadingsMenu:
    @patch("rentledger.cli.room_menu.ask_reading", side_effect=[150, 25, 210, 31])
    def test_stages_every_occupied_room(self, mock_reading, sample_room):
        from rentledger.cli.room_menu import stage_readings_menu

        first = sample_room(id=1)
        second = sample_room(id=2, name="P102")
        mock_rooms = MagicMock()
        mock_rooms.list_occupied.return_value = [first, second]
        mock_meters = MagicMock()

        stage_readings_menu(mock_rooms, mock_meters)

        mock_meters.stage_reading.assert_any_call(first, 150, 25)
        mock_meters.stage_reading.assert_any_call(second, 210, 31)

    @patch("rentledger.cli.room_menu.ask_reading", side_effect=[150, None])
    def test_cancel_stops(self, mock_reading, sample_room):
        from rentledger.cli.room_menu import stage_readings_menu

        mock_rooms = MagicMock()
        mock_rooms.list_occupied.return_value = [sample_room(id=1)]
        mock_meters = MagicMock()

        stage_readings_menu(mock_rooms, mock_meters)

        mock_meters.stage_reading.assert_not_called()

    @patch("rentledger.cli.room_menu.ask_reading", side_effect=[150, 25])
    def test_invalid_reading_is_reported(self, mock_reading, sample_room):
        from rentledger.cli.room_menu import stage_readings_menu

        mock_rooms = MagicMock()
        mock_rooms.list_occupied.return_value = [sample_room(id=1)]
        mock_meters = MagicMock()
        mock_meters.stage_reading.side_effect = InvalidMeterReading("P101", "water", 30, 25)

        stage_readings_menu(mock_rooms, mock_meters)


class TestRoomsMenu:
    @patch("rentledger.cli.room_menu.questionary")
    def test_back(self, mock_q, sample_room):
        from rentledger.cli.room_menu import rooms_menu

        mock_rooms = MagicMock()
        mock_rooms.list_rooms.return_value = [sample_room(id=1)]
        mock_q.select.return_value.ask.return_value = "Back"

        rooms_menu(mock_rooms, MagicMock())

    @patch("rentledger.cli.room_menu.questionary")
    def test_check_in(self, mock_q):
        from rentledger.cli.room_menu import rooms_menu

        room = Room(id=1, name="P101")
        mock_rooms = MagicMock()
        mock_rooms.list_rooms.return_value = [room]
        mock_q.select.return_value.ask.side_effect = [
            "1 - P101 (Available)",
            "Check in",
            "Back",
        ]

        rooms_menu(mock_rooms, MagicMock())

        mock_rooms.check_in.assert_called_once_with(room)

    @patch("rentledger.cli.room_menu.questionary")
    def test_discard_staged(self, mock_q, staged_room):
        from rentledger.cli.room_menu import rooms_menu

        room = staged_room(id=1)
        mock_rooms = MagicMock()
        mock_rooms.list_rooms.return_value = [room]
        mock_meters = MagicMock()
        mock_q.select.return_value.ask.side_effect = [
            "1 - P101 (Occupied)",
            "Discard staged reading",
            None,
        ]

        rooms_menu(mock_rooms, mock_meters)

        mock_meters.discard_staging.assert_called_once_with(room)

    @patch("rentledger.cli.room_menu.questionary")
    def test_refused_action_is_reported(self, mock_q):
        from rentledger.cli.room_menu import rooms_menu

        room = Room(id=1, name="P101", status=RoomStatus.OCCUPIED)
        mock_rooms = MagicMock()
        mock_rooms.list_rooms.return_value = [room]
        mock_rooms.check_out.side_effect = ValueError("Room P101 is not occupied")
        mock_q.select.return_value.ask.side_effect = ["1 - P101 (Occupied)", "Check out", "Back"]

        rooms_menu(mock_rooms, MagicMock())


class TestCreateRoomMenu:
    @patch("rentledger.cli.room_menu.ask_reading", side_effect=[1200, 80])
    @patch("rentledger.cli.room_menu.ask_amount", side_effect=[2_500_000, 2_500_000])
    @patch("rentledger.cli.room_menu.questionary")
    def test_create(self, mock_q, mock_amount, mock_reading):
        from rentledger.cli.room_menu import create_room_menu

        mock_q.text.return_value.ask.side_effect = ["P101", "Standard"]
        mock_rooms = MagicMock()

        create_room_menu(mock_rooms)

        mock_rooms.create_room.assert_called_once_with(
            "P101",
            2_500_000,
            room_type="Standard",
            deposit=2_500_000,
            electricity_meter=1200,
            water_meter=80,
        )

    @patch("rentledger.cli.room_menu.questionary")
    def test_cancel(self, mock_q):
        from rentledger.cli.room_menu import create_room_menu

        mock_q.text.return_value.ask.return_value = None
        mock_rooms = MagicMock()

        create_room_menu(mock_rooms)

        mock_rooms.create_room.assert_not_called()
