# sellcore: listing lifecycle and Blue Book pricing service
