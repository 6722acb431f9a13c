"""Usage document printed for -h/--help."""

SHORT_USAGE = "%(prog)s -s <source> -d <destination> [options]"

USAGE = """
    Usage: bcrm -s <source> -d <destination> [options]

    OPTIONS
    -------
    -s, --source                 Source device or folder to clone or restore from
    -d, --destination            Destination device or folder to clone or back up to
    -S, --source-image           Use an image as source, given as <path>:<type>
                                 e.g. '/path/to/file.vdi:vdi'. Types are listed below.
    -D, --destination-image      Use an image as destination, given as
                                 <path>:<type>[:<virtual-size>], e.g. '/path/to/file.img:raw:20G'
                                 Without a size the image file must already exist.
                                 With a size the image file is created or overwritten.
    -c, --check                  Create/validate checksums
    -z, --compress               Compress the backup (about 1:3, but very slow)
    -l, --split                  Split the backup into 1G chunks
    -H, --hostname               Set the hostname
    -R, --remove-pkgs            Remove the given whitespace-separated packages as a
                                 final step. Enclose the whole list in quotes.
    -n, --new-vg-name            LVM only: name of the new volume group
    -F, --vg-free-size           LVM only: space to add to the free space left in the
                                 source VG
    -e, --encrypt-with-password  LVM only: create an encrypted disk with this passphrase
    -p, --use-all-pvs            LVM only: use every disk on the destination as a PV
    -E, --lvm-expand             LVM only: let the given LV take the remaining free
                                 space, optionally a percentage of it, e.g. 'root:80'
    -u, --make-uefi              Convert to UEFI
    -w, --swap-size              Swap partition size; zero removes the swap partition
    -m, --resize-threshold       Do not resize partitions smaller than <size>
                                 (default 2048M)
    -T, --schroot                Run in a chroot with a fixed, tested tool chain
    -C, --no-cleanup             Keep temporary (backup) files and mounts
    -M, --disable-mount          Disable a mount point in <destination>/etc/fstab.
                                 May be given several times.
    -L, --to-lvm                 Convert a source partition to an LV, e.g.
                                 '/dev/sda1:boot'. May be given several times.
                                 Needs a valid mount point in fstab.
    -A, --all-to-lvm             Convert all source partitions (except EFI) to LVs
    -I, --include-partition      Copy a partition's content to a path, e.g.
                                 'part=/dev/sdX,dir=/some/path/,user=1000,group=1000,exclude=a,b'
                                 May be given several times.
    -q, --quiet                  Do not print anything on success
        --debug                  Log diagnostics to stderr
        --trace                  Log every scanned entry to stderr
    -h, --help                   Show this help text

    ADVANCED OPTIONS
    ----------------
    -b, --boot-size              Boot partition size, e.g. 200M or 4G. Only the bootable
                                 flag is checked, so use it with a dedicated /boot only.

    ADDITIONAL NOTES
    ----------------
    Sizes need a unit suffix, e.g. 200M or 4G:

    K [kilobytes]
    M [megabytes]
    G [gigabytes]
    T [terabytes]

    Image options always need the image type:

    raw    Plain binary
    vdi    VirtualBox
    qcow2  QEMU/KVM
    vmdk   VMware
    vhdx   Hyper-V

    EXIT STATUS
    -----------
    0  targets are valid (or help was shown)
    1  validation failed
    2  invalid option value
    3  unexpected I/O error
"""
