from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Sequence, Tuple


class BankDirectoryCache:
    """
    Cache in-memory cho danh sách ngân hàng lấy từ VietQR.

    Cache giữ một snapshot bất biến gồm (danh sách ngân hàng, thời điểm fetch).
    Khi refresh, cả snapshot được thay thế bằng một phép gán duy nhất nên request
    đang đọc không bao giờ thấy danh sách bị cập nhật dở dang.

    Attributes:
        ttl (timedelta): Thời gian sống của cache (mặc định 24 giờ)
        clock (Callable): Hàm trả về thời điểm hiện tại, có thể thay trong test
    """

    def __init__(self, ttl: timedelta = timedelta(hours=24),
                 clock: Callable[[], datetime] = datetime.now):
        self.ttl = ttl
        self.clock = clock
        self._snapshot: Optional[Tuple[tuple, datetime]] = None

    def get(self) -> Optional[tuple]:
        """
        Lấy danh sách ngân hàng nếu cache còn hiệu lực.

        Returns:
            Optional[tuple]: Danh sách ngân hàng, None nếu cache trống hoặc đã hết hạn
        """
        snapshot = self._snapshot
        if snapshot is None:
            print("🆕 Bank cache miss: chưa có dữ liệu")
            return None

        banks, fetched_at = snapshot
        age = self.clock() - fetched_at
        if age >= self.ttl:
            print(f"⏰ Bank cache đã hết hạn ({age.total_seconds() / 3600:.1f} giờ trước)")
            return None

        print(f"🔒 Bank cache hit: {len(banks)} ngân hàng")
        return banks

    def replace(self, banks: Sequence) -> tuple:
        """
        Thay thế toàn bộ danh sách ngân hàng, không merge với dữ liệu cũ.

        Returns:
            tuple: Danh sách mới đã được lưu
        """
        frozen = tuple(banks)
        self._snapshot = (frozen, self.clock())
        print(f"🔒 Đã cập nhật bank cache: {len(frozen)} ngân hàng")
        return frozen

    def clear(self) -> Dict:
        """Xóa cache và trả về số entries đã xóa."""
        old_count = len(self._snapshot[0]) if self._snapshot else 0
        self._snapshot = None
        return {
            "message": f"Đã xóa thành công {old_count} bank cache entries",
            "cleared_banks": old_count,
        }

    def get_cache_status(self) -> Dict:
        """
        Lấy trạng thái chi tiết của bank cache.

        Returns:
            Dict: Số ngân hàng, thời điểm fetch, tuổi cache và thời gian còn lại
        """
        current_time = self.clock()
        ttl_minutes = self.ttl.total_seconds() / 60
        snapshot = self._snapshot
        if snapshot is None:
            return {
                "total_cached_banks": 0,
                "fetched_at": None,
                "minutes_ago": None,
                "will_expire_in_minutes": 0,
                "cache_duration_minutes": ttl_minutes,
                "current_time": current_time.isoformat(),
            }

        banks, fetched_at = snapshot
        minutes_ago = (current_time - fetched_at).total_seconds() / 60
        return {
            "total_cached_banks": len(banks),
            "fetched_at": fetched_at.isoformat(),
            "minutes_ago": round(minutes_ago, 1),
            "will_expire_in_minutes": round(max(0, ttl_minutes - minutes_ago), 1),
            "cache_duration_minutes": ttl_minutes,
            "current_time": current_time.isoformat(),
        }
