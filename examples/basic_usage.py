"""Basic usage example for ransacfit."""

from ransacfit.core import RansacProcessor
from ransacfit.utils.io_handler import JSONWriter
from ransacfit.utils.logger import logger_from_config

LINE_POINTS = [
    (0, 1.2), (1, 3.1), (2, 5.0), (3, 6.8), (4, 9.2),
    (5, 10.9), (6, 13.0), (7, 15.1), (8, 16.8), (9, 19.2),

    (1, 10.0), (2, -3.5), (3, 20.0), (4, 1.0), (6, 25.0),
    (7, -5.0), (8, 30.0), (10, -10.0), (11, 35.0), (12, 0.0),
]

# Inliers satisfy 2x + 0.5y - z + 1 = 0
PLANE_POINTS = [
    (1.0, 1.0, 3.5), (2.0, 1.0, 5.5), (1.0, 2.0, 4.0), (3.0, 2.0, 8.0),
    (0.0, 0.0, 1.0), (2.5, 1.5, 7.25), (1.5, 0.5, 4.25), (0.5, 1.5, 2.75),

    (10.0, 10.0, 10.0), (10.0, 20.0, 10.0), (5.0, 5.0, 100.0), (-5.0, -5.0, -5.0),
    (50.0, 1.0, 1.0), (20.0, 20.0, 5.0), (1.0, 1.0, -50.0), (-10.0, 10.0, 10.0),
]


def main():
    """Fit the reference line and plane and save the results."""
    processor = RansacProcessor()
    logger = logger_from_config(processor.config)

    logger.info("Fitting line...")
    line_result = processor.fit_line(LINE_POINTS)
    logger.info(f"Best line: {line_result['equation']} ({line_result['status']})")

    logger.info("Fitting plane...")
    plane_result = processor.fit_plane(PLANE_POINTS)
    if plane_result["status"] == "failed":
        logger.warning("RANSAC failed to find a valid plane model")
    else:
        logger.info(f"Best plane: {plane_result['equation']}")
        logger.info(f"Average inlier error: {plane_result['quality']['mean_inlier_error']:.4f}")
        logger.info(f"Total inliers: {plane_result['inliers']['count']} out of "
                    f"{plane_result['inliers']['total_points']} points")

    output_path = "output/fit_results.json"
    JSONWriter.save_results({"line": line_result, "plane": plane_result}, output_path)
    logger.info(f"Results saved to {output_path}")


if __name__ == "__main__":
    main()
